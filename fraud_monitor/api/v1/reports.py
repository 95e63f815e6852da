"""GET/POST /v1/reports - reports of suspicious transactions to the authorities"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from fraud_monitor.api.v1.schemas import ReportCreateRequest, ReportSchema
from fraud_monitor.api.dependencies import get_db, get_request_id
from fraud_monitor.domain.exceptions import InvalidReportError
from fraud_monitor.domain.reports import build_report
from fraud_monitor.infrastructure.database.repositories import ReportRepository

router = APIRouter()


@router.post("/reports", response_model=ReportSchema, status_code=201)
def submit_report(request_body: ReportCreateRequest, request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)
    try:
        report = build_report(request_body.transaction_id, request_body.description)
    except InvalidReportError as e:
        raise HTTPException(status_code=422, detail=str(e))

    db_report = ReportRepository(db).create_report(report)
    db.commit()
    logging.info(
        "Fraud report submitted",
        extra={"request_id": request_id, "transaction_id": report.transaction_id},
    )
    return ReportSchema.model_validate(db_report)


@router.get("/reports", response_model=List[ReportSchema])
def list_reports(limit: int = Query(50, ge=1, le=500), db: Session = Depends(get_db)):
    """Submitted reports, newest first"""
    return [ReportSchema.model_validate(r) for r in ReportRepository(db).list_reports(limit=limit)]
