"""
Prometheus scrape endpoint.

Counters and the live-connection gauge are recorded in
dmchat/observability/metrics.py by the delivery router, the sessions and the
app-level exception handlers.

    curl http://localhost:3000/metrics
"""

from fastapi import APIRouter, Response

from dmchat.observability import get_metrics_content

router = APIRouter(prefix="/metrics", tags=["observability"])


@router.get("", include_in_schema=False)
async def scrape():
    content, content_type = get_metrics_content()
    return Response(content=content, media_type=content_type)
