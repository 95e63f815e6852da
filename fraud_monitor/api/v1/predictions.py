"""POST /v1/enrich - score an arbitrary transaction list"""

from fastapi import APIRouter, Depends

from fraud_monitor.api.v1.schemas import EnrichRequest, EnrichResponse, TransactionSchema
from fraud_monitor.api.dependencies import get_config_store, get_enricher
from fraud_monitor.domain.enrichment import PredictionEnricher
from fraud_monitor.infrastructure.config_store import EndpointConfigStore

router = APIRouter()


@router.post("/enrich", response_model=EnrichResponse)
async def enrich_transactions(
    request_body: EnrichRequest,
    enricher: PredictionEnricher = Depends(get_enricher),
    config_store: EndpointConfigStore = Depends(get_config_store),
):
    """
    Attach fraud predictions to the posted transactions.

    Uses the configured prediction endpoint and falls back to the local
    heuristic when it is unavailable; never fails because of the endpoint.
    """
    transactions = [t.to_domain() for t in request_body.transactions]
    result = await enricher.enrich(transactions, config_store.current())

    return EnrichResponse(
        transactions=[TransactionSchema.model_validate(t) for t in result.transactions],
        total_fraud_count=result.total_fraud_count,
        model_version=result.model_version,
        source=result.source,
        warning=result.warning,
    )
