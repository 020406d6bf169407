from fastapi import APIRouter, Depends, HTTPException, status
from shortlink_app.exceptions import InvalidURLError, LinkNotFoundError
from shortlink_app.schemas.link import LinkCreate, LinkResponse, LinkStats
from shortlink_app.services.link_store import LinkStore
from shortlink_app.dependencies import get_link_store

router = APIRouter(prefix="/urls", tags=["urls"])


@router.post("/", response_model=LinkResponse, status_code=status.HTTP_201_CREATED)
def create_short_url(
    link_data: LinkCreate,
    link_store: LinkStore = Depends(get_link_store)
):
    """Create a new short URL"""
    try:
        return link_store.create_link(link_data.url)
    except InvalidURLError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{short_code}/stats", response_model=LinkStats)
def get_url_stats(
    short_code: str,
    link_store: LinkStore = Depends(get_link_store)
):
    """Get the record and click count for a short URL"""
    try:
        return link_store.get_stats(short_code)
    except LinkNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="URL not found"
        )
