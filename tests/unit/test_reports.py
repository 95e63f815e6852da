"""Unit tests for fraud report validation"""

import pytest
from fraud_monitor.domain.exceptions import InvalidReportError
from fraud_monitor.domain.reports import build_report
from fraud_monitor.infrastructure.database.repositories import ReportRepository


def test_build_report_strips_fields():
    report = build_report("  TXN-123456 ", " Card used in two countries within an hour ")

    assert report.transaction_id == "TXN-123456"
    assert report.description == "Card used in two countries within an hour"
    assert report.submitted_at.tzinfo is not None


def test_build_report_requires_transaction_id():
    with pytest.raises(InvalidReportError, match="Transaction ID is required"):
        build_report("   ", "details")


def test_build_report_requires_description():
    with pytest.raises(InvalidReportError, match="details"):
        build_report("TXN-1", "")


def test_repository_lists_newest_first(db):
    repo = ReportRepository(db)
    first = build_report("TXN-1", "first report")
    second = build_report("TXN-2", "second report")
    repo.create_report(first)
    repo.create_report(second)
    db.commit()

    assert [r.transaction_id for r in repo.list_reports()] == ["TXN-2", "TXN-1"]
