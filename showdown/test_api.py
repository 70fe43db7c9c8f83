import pytest

from werkzeug.test import Client

from showdown import api
from showdown import config
from showdown import hands


def _client():
    return Client(api.app)


def test_winners():
    resp = _client().post(
        "/api/winners",
        json=dict(hands=["4D 5D 6D 7D 8D", "2S 4S 5S 8S 9S", "4S 5S 6S 7S 8S"]),
    )
    assert resp.status_code == 200
    assert resp.get_json() == dict(winners=["4D 5D 6D 7D 8D", "4S 5S 6S 7S 8S"])


def test_winners_empty():
    resp = _client().post("/api/winners", json=dict(hands=[]))
    assert resp.status_code == 200
    assert resp.get_json() == dict(winners=[])


def test_winners_invalid_hand():
    resp = _client().post(
        "/api/winners", json=dict(hands=["4S 5H 6D 7C 8H", "2S 2S 9H 9H JD"])
    )
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["index"] == 1
    assert body["hand"] == "2S 2S 9H 9H JD"
    assert "2S" in body["reason"]


def test_classify():
    resp = _client().post("/api/classify", json=dict(hand="5D AH 3H 4D 2S"))
    assert resp.status_code == 200
    assert resp.get_json() == dict(
        category="STRAIGHT",
        ranked=["5D", "4D", "3H", "2S", "AH"],
        kickers=[],
        ace_low=True,
    )

    resp = _client().post("/api/classify", json=dict(hand="4S 4D 9H 10H JH"))
    assert resp.get_json() == dict(
        category="ONE_PAIR",
        ranked=["4S", "4D"],
        kickers=["JH", "10H", "9H"],
        ace_low=False,
    )


def test_classify_invalid_hand():
    resp = _client().post("/api/classify", json=dict(hand=""))
    assert resp.status_code == 400
    assert resp.get_json()["index"] == 0


def test_bad_body():
    resp = _client().post(
        "/api/winners", data="not json", content_type="application/json"
    )
    assert resp.status_code == 400

    resp = _client().post("/api/winners", json=dict(cards=["4S 5H 6D 7C 8H"]))
    assert resp.status_code == 400


def test_routing():
    assert _client().get("/api/winners").status_code == 405
    assert _client().post("/api/nothing", json=dict()).status_code == 404


def test_internal_error(monkeypatch):
    def broken(_hands):
        raise RuntimeError("Hand matched no category")

    monkeypatch.setattr(hands, "winning_hands", broken)
    resp = _client().post("/api/winners", json=dict(hands=["4S 5H 6D 7C 8H"]))
    assert resp.status_code == 500


def test_listen_address(monkeypatch):
    assert config.listen_address("127.0.0.1:8080") == ("127.0.0.1", 8080)

    monkeypatch.setattr(config, "LISTEN_ADDR", "0.0.0.0:6543")
    assert config.listen_address() == ("0.0.0.0", 6543)


@pytest.mark.parametrize("addr", ["6543", "localhost:", ":6543", "localhost:http"])
def test_listen_address_rejects(addr):
    with pytest.raises(ValueError):
        config.listen_address(addr)
