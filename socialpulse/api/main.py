"""HTTP API over the analysis service."""
from datetime import datetime, timezone
from typing import Dict, Optional
from fastapi import FastAPI, HTTPException, Header, Query
from pydantic import BaseModel
from socialpulse.analytics.service import AnalysisService
from socialpulse.common.config import settings
from socialpulse.common.exceptions import InvalidQueryError
from socialpulse.common.logger import setup_logger
from socialpulse.common.metrics import errors_total
from socialpulse.common.models import CommentPage, SearchResult

logger = setup_logger(__name__)


class ApiKeyUpdate(BaseModel):
    platform: str
    apiKey: Optional[str] = None


def verify_token(authorization: Optional[str] = Header(None)):
    """Verify API token."""
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    token = authorization.replace("Bearer ", "")
    if token != settings.API_TOKEN:
        raise HTTPException(status_code=403, detail="Invalid token")

    return token


def create_app(service: Optional[AnalysisService] = None) -> FastAPI:
    """Build the app around ``service`` (a default one when omitted)."""
    app = FastAPI(title="SocialPulse API")
    service = service or AnalysisService()

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "credentials_configured": service.collector.has_credentials(),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    @app.get("/analyze", response_model=SearchResult)
    def analyze(
        keyword: str = Query(..., description="Search keyword or exact video title"),
        timeperiod: str = Query(str(settings.DEFAULT_TIMEPERIOD), description="Lookback window in days"),
        platform: str = Query("all"),
        refresh: bool = Query(False),
        is_video_title_search: bool = Query(False, alias="isVideoTitleSearch"),
        page: Optional[int] = Query(None, ge=1),
        page_size: Optional[int] = Query(None, ge=1, le=500),
        authorization: Optional[str] = Header(None)
    ):
        """Run (or serve the cached) analysis for a query."""
        verify_token(authorization)

        try:
            return service.analyze(
                keyword, timeperiod, platform,
                refresh=refresh,
                is_video_title_search=is_video_title_search,
                page=page,
                page_size=page_size,
            )
        except InvalidQueryError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app.get("/comments", response_model=CommentPage)
    def get_comments(
        query_id: int = Query(..., alias="queryId"),
        page: Optional[int] = Query(None, ge=1),
        page_size: Optional[int] = Query(None, ge=1, le=500),
        authorization: Optional[str] = Header(None)
    ):
        """Page through a query's comments."""
        verify_token(authorization)

        comment_page = service.get_comments(query_id, page, page_size)
        if comment_page is None:
            raise HTTPException(status_code=404, detail="Search query not found")
        return comment_page

    @app.get("/settings/api-keys")
    def get_api_keys(authorization: Optional[str] = Header(None)):
        verify_token(authorization)
        return service.get_api_keys()

    @app.post("/settings/api-keys")
    def save_api_key(update: ApiKeyUpdate, authorization: Optional[str] = Header(None)):
        verify_token(authorization)

        try:
            return service.save_api_key(update.platform, update.apiKey)
        except InvalidQueryError as e:
            errors_total.labels(component="api", error_type="api_key_error").inc()
            raise HTTPException(status_code=400, detail=str(e))

    @app.get("/settings/alerts")
    def get_alert_settings(authorization: Optional[str] = Header(None)):
        verify_token(authorization)
        return service.get_alert_settings()

    @app.post("/settings/alerts")
    def save_alert_settings(alert_settings: Dict[str, bool],
                            authorization: Optional[str] = Header(None)):
        verify_token(authorization)
        return service.save_alert_settings(alert_settings)

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host=settings.API_HOST, port=settings.API_PORT)
