import numpy as np
import pytest

from dcauction.auction import (
    Auction,
    AuctionMeta,
    Result,
    load_auction_csv,
    read_numeric,
)


def test_read_numeric_skips_header_and_pads(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("a,b,c\n1,2,3\n4,5\n")
    data = read_numeric(path, 1)
    assert data.shape == (2, 3)
    assert data[0].tolist() == [1.0, 2.0, 3.0]
    assert data[1].tolist() == [4.0, 5.0, 0.0]


def test_read_numeric_without_header(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("7.5,-2\n")
    data = read_numeric(path)
    assert data.tolist() == [[7.5, -2.0]]


def test_read_numeric_drops_empty_fields(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("1,,2\n")
    assert read_numeric(path).tolist() == [[1.0, 2.0]]


def test_read_numeric_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_numeric(tmp_path / "absent.csv")


def test_read_numeric_rejects_text(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("1,abc\n")
    with pytest.raises(ValueError):
        read_numeric(path)


def _write_auction(tmp_path, bid_lines):
    bids = tmp_path / "bids.csv"
    supply = tmp_path / "supply.csv"
    bids.write_text("id,q,v0,v1\n" + "".join(line + "\n" for line in bid_lines))
    supply.write_text("s0,x0,s1,x1\n4,0,6,0\n")
    return bids, supply


def test_load_auction_splits_bids(tmp_path):
    bids, supply = _write_auction(tmp_path, ["0,2,10,20", "1,3,5,7", "2,-1,8,9"])
    auction = load_auction_csv(bids, supply)
    assert auction.supply.tolist() == [4.0, 6.0]
    assert auction.num_goods == 2
    assert auction.pos_demand.tolist() == [2.0, 3.0]
    assert auction.neg_demand.tolist() == [1.0]
    assert auction.pos_valuation.tolist() == [[10.0, 20.0], [5.0, 7.0]]
    assert auction.neg_valuation.tolist() == [[8.0, 9.0]]
    assert auction.num_pos_bids == 2
    assert auction.num_neg_bids == 1


def test_load_auction_without_negative_bids(tmp_path):
    bids, supply = _write_auction(tmp_path, ["0,2,10,20"])
    auction = load_auction_csv(bids, supply)
    assert auction.num_neg_bids == 0
    assert auction.neg_valuation.shape == (0, 2)
    assert auction.pos_valuation.tolist() == [[10.0, 20.0]]


def test_default_auction_is_empty():
    auction = Auction()
    assert auction.num_goods == 0
    assert auction.num_pos_bids == 0
    assert auction.num_neg_bids == 0


def test_result_and_meta_fields():
    result = Result(prices=np.array([1.0, 2.0]), objective_value=3.5, running_time=12)
    assert result.prices.tolist() == [1.0, 2.0]
    assert result.oversupply.size == 0
    assert result.running_time == 12
    meta = AuctionMeta(id=4, num_goods=3, num_pos_bids=5)
    assert (meta.id, meta.num_goods, meta.num_pos_bids, meta.num_neg_bids) == (4, 3, 5, 0)