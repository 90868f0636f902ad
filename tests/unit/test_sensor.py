# tests/unit/test_sensor.py

from typing import List

from geocoin.components import LatLng
from geocoin.sensor import ReplaySensor


def test_replay_delivers_in_order_to_subscribers() -> None:
    sensor = ReplaySensor([LatLng(1, 1), LatLng(2, 2)])
    received: List[LatLng] = []
    handle = sensor.subscribe(received.append)
    assert sensor.active
    assert sensor.replay() == 2
    assert received == [LatLng(1, 1), LatLng(2, 2)]
    assert sensor.remaining == 0
    sensor.unsubscribe(handle)
    assert not sensor.active


def test_no_delivery_without_subscriber() -> None:
    sensor = ReplaySensor([LatLng(1, 1)])
    assert sensor.emit() is False
    assert sensor.remaining == 1


def test_unsubscribe_stops_delivery() -> None:
    sensor = ReplaySensor()
    received: List[LatLng] = []
    handle = sensor.subscribe(received.append)
    sensor.push(LatLng(3, 3))
    assert sensor.emit() is True
    sensor.unsubscribe(handle)
    sensor.unsubscribe(handle)
    sensor.push(LatLng(4, 4))
    assert sensor.emit() is False
    assert received == [LatLng(3, 3)]
