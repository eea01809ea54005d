"""POST /v1/advice - streamed answers from the advice assistant"""

import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from finance_tracker.api.dependencies import get_advice_client, get_request_id
from finance_tracker.api.v1.schemas import AdviceRequest
from finance_tracker.domain.exceptions import AdviceServiceError, AdviceUnavailableError
from finance_tracker.domain.models import FinancialData
from finance_tracker.infrastructure.clients.advice import AdviceClient
from finance_tracker.infrastructure.database.repositories import SnapshotRepository
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.observability.metrics import advice_request_counter

router = APIRouter()

RETRY_MESSAGE = "Não foi possível obter uma resposta do assistente. Tente novamente."


async def _stream(
    client: AdviceClient,
    data: FinancialData,
    question: str,
    request_id: str,
) -> AsyncIterator[str]:
    """Relay fragments; a failure mid-stream ends it with the retry message"""
    try:
        async for fragment in client.stream_advice(data, question):
            yield fragment
    except AdviceServiceError as e:
        advice_request_counter.labels(outcome="failed").inc()
        logging.error(f"Advice API error: {e}", extra={"request_id": request_id})
        yield f"\n{RETRY_MESSAGE}"
        return
    advice_request_counter.labels(outcome="completed").inc()


@router.post("/advice")
async def ask_advice(
    body: AdviceRequest,
    request: Request,
    db: Session = Depends(get_db),
    client: AdviceClient = Depends(get_advice_client),
):
    """
    Ask a question about the current snapshot.

    Only a sanitized projection of the data is sent. The answer streams as
    plain text; disconnecting stops the upstream request without touching
    stored data.
    """
    request_id = get_request_id(request)
    try:
        client.ensure_configured()
    except AdviceUnavailableError as e:
        advice_request_counter.labels(outcome="unavailable").inc()
        logging.error(f"Advice unavailable: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail=RETRY_MESSAGE)

    data = SnapshotRepository(db).load_data()
    return StreamingResponse(
        _stream(client, data, body.question, request_id),
        media_type="text/plain; charset=utf-8",
    )
