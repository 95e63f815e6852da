"""GET/POST /v1/rules - fraud rule configuration"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fraud_monitor.api.v1.schemas import RuleCreateRequest, RuleSchema
from fraud_monitor.api.dependencies import get_db
from fraud_monitor.domain.exceptions import InvalidRuleError
from fraud_monitor.domain.rules import validate_rule
from fraud_monitor.infrastructure.database.repositories import RuleRepository

router = APIRouter()


@router.get("/rules", response_model=List[RuleSchema])
def list_rules(db: Session = Depends(get_db)):
    return [RuleSchema.model_validate(r) for r in RuleRepository(db).list_rules()]


@router.post("/rules", response_model=RuleSchema, status_code=201)
def create_rule(request_body: RuleCreateRequest, db: Session = Depends(get_db)):
    """
    Save a new rule.

    Numeric rule types store their value as a number. Rules are kept for
    review only; they are not applied to transactions.
    """
    try:
        value = validate_rule(request_body.name, request_body.description, request_body.type, request_body.value)
    except InvalidRuleError as e:
        raise HTTPException(status_code=422, detail=str(e))

    repo = RuleRepository(db)
    # Make sure the seed rules take the first ids
    repo.list_rules()
    rule = repo.create_rule(
        name=request_body.name.strip(),
        description=request_body.description.strip(),
        type=request_body.type,
        value=value,
        enabled=request_body.enabled,
    )
    db.commit()
    return RuleSchema.model_validate(rule)
