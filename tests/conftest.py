import json
from datetime import datetime

import pytest

from models.transaction import RecordSnapshot
from services.delivery import DeliveryAdapter
from services.export_service import ExportService
from services.record_source import OfflineRecordSource

NOW = datetime(2026, 10, 17, 12, 0, 0)


class FakeShare:
    def __init__(self, available=True, accept=True, error=None):
        self.available = available
        self.accept = accept
        self.error = error
        self.calls = []

    def is_available(self):
        return self.available

    def share(self, path, mime_type, dialog_title):
        self.calls.append((path, mime_type, dialog_title))
        if self.error:
            raise self.error
        return self.accept


class FakeMail:
    sender = "app@example.com"

    def __init__(self, available=True, recipient="me@example.com", error=None):
        self.available = available
        self.recipient = recipient
        self.error = error
        self.sent = []

    def is_available(self):
        return self.available

    def default_recipient(self):
        return self.recipient

    def send(self, msg):
        if self.error:
            raise self.error
        self.sent.append(msg)


@pytest.fixture
def raw_records():
    expenses = [
        {"id": 1, "title": "Lunch", "amount": 100, "categoryId": 1, "createdAt": "2024-05-01"},
    ]
    deposits = [
        {"id": 2, "title": "Salary", "amount": 500, "createdAt": "2024-05-02"},
    ]
    return expenses, deposits


@pytest.fixture
def snapshot(raw_records):
    return RecordSnapshot.from_raw(*raw_records)


@pytest.fixture
def snapshot_file(tmp_path, raw_records):
    path = tmp_path / "offline_data.json"
    expenses, deposits = raw_records
    path.write_text(json.dumps({"expenses": expenses, "deposits": deposits}), encoding="utf-8")
    return path


@pytest.fixture
def fake_share():
    return FakeShare()


@pytest.fixture
def fake_mail():
    return FakeMail()


@pytest.fixture
def delivery(tmp_path, fake_share, fake_mail):
    return DeliveryAdapter(tmp_path / "exports", fake_share, fake_mail, clock=lambda: NOW)


@pytest.fixture
def export_service(snapshot_file, delivery):
    return ExportService(OfflineRecordSource(snapshot_file), delivery, clock=lambda: NOW)
