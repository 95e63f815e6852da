"""GET/PUT /v1/settings/endpoint - prediction endpoint configuration"""

from fastapi import APIRouter, Depends, HTTPException

from fraud_monitor.api.v1.schemas import EndpointSettingsRequest, EndpointSettingsResponse
from fraud_monitor.api.dependencies import get_config_store
from fraud_monitor.domain.exceptions import InvalidEndpointError
from fraud_monitor.infrastructure.config_store import EndpointConfigStore

router = APIRouter()


@router.get("/settings/endpoint", response_model=EndpointSettingsResponse)
def get_endpoint_settings(config_store: EndpointConfigStore = Depends(get_config_store)):
    return EndpointSettingsResponse.model_validate(config_store.current())


@router.put("/settings/endpoint", response_model=EndpointSettingsResponse)
def update_endpoint_settings(
    request_body: EndpointSettingsRequest,
    config_store: EndpointConfigStore = Depends(get_config_store),
):
    """Save a new prediction API URL; cached predictions are recomputed on next read"""
    try:
        config = config_store.update(request_body.base_url)
    except InvalidEndpointError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return EndpointSettingsResponse.model_validate(config)
