"""API routes for alert rule management."""

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.alerting.domain.exceptions import RuleValidationError
from src.api.application.alert_rule_service import AlertRuleService
from src.api.domain.exceptions import AlertRuleNotFoundError, MalformedRequestError, PersistenceError
from src.api.domain.schemas import AlertRuleForm, AlertRuleIdResponse, AlertRuleResponse
from src.api.infrastructure.container import get_container
from src.api.infrastructure.database import get_db_session

router = APIRouter(tags=["alert-rules"])


def get_alert_rule_service() -> AlertRuleService:
    """Dependency to get alert rule service."""
    container = get_container()
    return AlertRuleService(registry=container.rule_registry())


@router.get("/alert-rule", response_model=list[AlertRuleResponse])
async def list_alert_rules(service: AlertRuleService = Depends(get_alert_rule_service)):
    """List active alert rules from the in-memory registry."""
    return service.list_alert_rules()


@router.post("/alert-rule", response_model=AlertRuleIdResponse, status_code=201)
async def create_alert_rule(
    form: AlertRuleForm,
    session: AsyncSession = Depends(get_db_session),
    service: AlertRuleService = Depends(get_alert_rule_service),
):
    """
    Create an alert rule.

    The rule is validated, stored, then published to the registry.
    """
    try:
        rule_id = await service.create_alert_rule(session, form)
    except RuleValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return AlertRuleIdResponse(id=rule_id)


@router.patch("/alert-rule/{rule_id}", response_model=AlertRuleIdResponse)
async def update_alert_rule(
    form: AlertRuleForm,
    rule_id: int = Path(..., ge=1),
    session: AsyncSession = Depends(get_db_session),
    service: AlertRuleService = Depends(get_alert_rule_service),
):
    """
    Replace an alert rule.

    Every field is overwritten from the body; omitted fields take their defaults.
    """
    try:
        rule_id = await service.update_alert_rule(session, rule_id, form)
    except AlertRuleNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except (RuleValidationError, MalformedRequestError) as e:
        raise HTTPException(status_code=400, detail=e.message)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return AlertRuleIdResponse(id=rule_id)


@router.post("/batch-delete/alert-rule", status_code=204)
async def batch_delete_alert_rules(
    rule_ids: list[int] = Body(..., description="IDs of the alert rules to delete"),
    session: AsyncSession = Depends(get_db_session),
    service: AlertRuleService = Depends(get_alert_rule_service),
):
    """Permanently delete alert rules by ID."""
    try:
        await service.batch_delete_alert_rules(session, rule_ids)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return Response(status_code=204)
