"""Data access layer for settings, rules, and reports"""

from typing import List, Optional, Union
from sqlalchemy import func
from sqlalchemy.orm import Session
from fraud_monitor.infrastructure.database.models import AppSetting, FraudRule, FraudReportRecord
from fraud_monitor.domain.models import FraudReport, Rule
from fraud_monitor.domain.rules import DEFAULT_RULES, rule_id


class SettingsRepository:
    """Repository for key-value application settings"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        setting = self.db.get(AppSetting, key)
        return setting.value if setting else None

    def set(self, key: str, value: str) -> None:
        """Insert or update a setting (caller commits)"""
        setting = self.db.get(AppSetting, key)
        if setting is None:
            self.db.add(AppSetting(key=key, value=value))
        else:
            setting.value = value
        self.db.flush()


class RuleRepository:
    """Repository for fraud detection rules"""

    def __init__(self, db: Session):
        self.db = db

    def list_rules(self) -> List[Rule]:
        """All rules in creation order, seeding the defaults on first use"""
        if self.db.query(func.count(FraudRule.id)).scalar() == 0:
            for rule in DEFAULT_RULES:
                self.create_rule(**rule)
            self.db.commit()

        return [_to_rule(r) for r in self.db.query(FraudRule).order_by(FraudRule.id).all()]

    def create_rule(
        self,
        name: str,
        description: str,
        type: str,
        value: Union[float, str],
        enabled: bool = True,
    ) -> Rule:
        """Persist a validated rule with the next sequential id (caller commits)"""
        sequence = (self.db.query(func.count(FraudRule.id)).scalar() or 0) + 1
        db_rule = FraudRule(
            rule_id=rule_id(sequence),
            name=name,
            description=description,
            type=type,
            value=value,
            enabled=enabled,
        )
        self.db.add(db_rule)
        self.db.flush()
        return _to_rule(db_rule)


class ReportRepository:
    """Repository for fraud reports"""

    def __init__(self, db: Session):
        self.db = db

    def create_report(self, report: FraudReport) -> FraudReportRecord:
        db_report = FraudReportRecord(
            transaction_id=report.transaction_id,
            description=report.description,
            submitted_at=report.submitted_at,
        )
        self.db.add(db_report)
        self.db.flush()  # Get ID without committing
        return db_report

    def list_reports(self, limit: int = 50) -> List[FraudReportRecord]:
        """Most recent reports first"""
        return (
            self.db.query(FraudReportRecord)
            .order_by(FraudReportRecord.submitted_at.desc())
            .limit(limit)
            .all()
        )


def _to_rule(db_rule: FraudRule) -> Rule:
    return Rule(
        id=db_rule.rule_id,
        name=db_rule.name,
        description=db_rule.description,
        type=db_rule.type,
        value=db_rule.value,
        enabled=db_rule.enabled,
    )
