from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from shortlink_app.config import settings
from shortlink_app.dependencies import get_link_store
from shortlink_app.exceptions import LinkNotFoundError
from shortlink_app.services.link_store import LinkStore
from shortlink_app.services.short_code_strategies import is_valid_short_code

router = APIRouter(tags=["redirect"])


@router.get("/{short_code}")
def redirect_to_long_url(
    short_code: str,
    link_store: LinkStore = Depends(get_link_store)
):
    """
    Redirect to the original URL and count the click.
    
    Paths that cannot be a short code are rejected before touching the store.
    """
    if not is_valid_short_code(short_code, settings.short_code_length):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    
    try:
        long_url = link_store.resolve(short_code)
    except LinkNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    
    return RedirectResponse(url=long_url, status_code=settings.redirect_status_code)
