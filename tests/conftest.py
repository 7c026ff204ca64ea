"""
Shared fixtures: one canonical payload per supported feed schema.
"""
import json

import pytest


@pytest.fixture
def channel_events_payload():
    """channels[].events[] feed"""
    return {
        "channels": [
            {
                "channelId": "20",
                "callSign": "ZED",
                "channelNo": "20",
                "thumbnail": "//img.example.com/zed.png",
                "events": [
                    {
                        "startTime": "1700000000",
                        "endTime": "1700003600",
                        "program": {"title": "Late Show", "shortDesc": ""},
                    }
                ],
            },
            {
                "channelId": "5",
                "callSign": "ABC",
                "channelNo": "5",
                "events": [
                    {
                        "startTime": "1700000000",
                        "endTime": "1700003600",
                        "program": {"title": "News", "shortDesc": "Daily news"},
                    },
                    {
                        "startTime": "xyz",
                        "endTime": "1700003600",
                        "program": {"title": "Broken"},
                    },
                ],
            },
            {
                "channelId": "5",
                "callSign": "DUP",
                "channelNo": "5",
                "events": [],
            },
        ]
    }


@pytest.fixture
def program_schedules_payload():
    """data.items[].programSchedules[] feed"""
    return {
        "data": {
            "items": [
                {
                    "channel": {"sourceId": "200", "networkName": "NBC", "name": "NBC News", "logo": "x"},
                    "programSchedules": [
                        {"startTime": 1700000000, "endTime": 1700003600, "title": "Today"},
                    ],
                },
                {
                    "channel": {"sourceId": "100", "networkName": "CBS", "name": "CBS"},
                    "programSchedules": [
                        {"startTime": 1700003600, "endTime": 1700007200, "title": "Morning"},
                        {"startTime": 1700007200, "endTime": 1700010800, "title": ""},
                    ],
                },
                {
                    "channel": {"sourceId": "100", "networkName": "ZZZ"},
                    "programSchedules": [],
                },
                {
                    "channel": {"sourceId": "300", "networkName": "ABC"},
                },
            ]
        }
    }


@pytest.fixture
def content_streams_payload():
    """items[].content.streams[] feed"""
    return {
        "items": [
            {
                "content": {
                    "streams": [
                        {
                            "channel": "ch-b",
                            "title": "Show B",
                            "start_date": "2024-01-01T10:00:00Z",
                            "end_date": "2024-01-01T11:00:00Z",
                            "desc": "B desc",
                            "thumbnail": "https://img.example.com/b.png",
                        },
                        {
                            "channel": "ch-a",
                            "title": "Show A",
                            "start_date": "2024-01-01T12:00:00+02:00",
                            "end_date": "2024-01-01T13:00:00+02:00",
                        },
                    ]
                }
            },
            {
                "content": {
                    "streams": [
                        {
                            "channel": "ch-b",
                            "title": "Show B2",
                            "start_date": "Mon, 01 Jan 2024 11:00:00 GMT",
                            "end_date": "Mon, 01 Jan 2024 12:00:00 GMT",
                        },
                        {
                            "channel": "ch-c",
                            "title": "Broken",
                            "start_date": "xyz",
                            "end_date": "2024-01-01T12:00:00Z",
                        },
                    ]
                }
            },
        ]
    }


@pytest.fixture
def all_payloads(channel_events_payload, program_schedules_payload, content_streams_payload):
    return [channel_events_payload, program_schedules_payload, content_streams_payload]


@pytest.fixture
def write_json(tmp_path):
    """Write an object as JSON under tmp_path and return the path"""
    def _write(name, obj):
        path = tmp_path / name
        path.write_text(json.dumps(obj), encoding="utf-8")
        return path
    return _write
