import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shortlink_app.config import settings
from shortlink_app.exceptions import (
    InvalidURLError,
    LinkNotFoundError,
    ShortCodeExhaustedError,
    StorageError,
)
from shortlink_app.models.link import Link
from shortlink_app.services.short_code_strategies import (
    ShortCodeStrategy,
    create_short_code_strategy,
)

logger = logging.getLogger(__name__)

RECOGNIZED_SCHEMES = ("http://", "https://")


class LinkStore:
    """
    Owns persisted links: creation, redirect resolution and stats.
    
    The store wraps a single database session and is built per request
    (see dependencies.get_link_store), so tests can hand it their own
    session and short code strategy.
    
    Guarantees:
    - short codes are unique, enforced by the database constraint
      (the existence check is only a fast path)
    - every resolve adds exactly one click, done as one UPDATE in SQL
      so concurrent resolves never lose increments
    """
    
    def __init__(
        self,
        db: Session,
        short_code_strategy: Optional[ShortCodeStrategy] = None,
        max_retries: Optional[int] = None,
        normalize_urls: Optional[bool] = None,
        default_scheme: Optional[str] = None,
    ):
        """
        Args:
            db: Database session
            short_code_strategy: Code generator (default from settings)
            max_retries: Code generation attempts before giving up
            normalize_urls: Prepend default_scheme to scheme-less URLs
            default_scheme: Scheme used by normalization
        """
        self.db = db
        self.short_code_strategy = short_code_strategy or create_short_code_strategy()
        self.max_retries = max_retries if max_retries is not None else settings.max_retries
        self.normalize_urls = (
            normalize_urls if normalize_urls is not None else settings.normalize_urls
        )
        self.default_scheme = default_scheme or settings.default_scheme

    def normalize_url(self, long_url: Optional[str]) -> str:
        """
        Validate and normalize a long URL.
        
        Raises:
            InvalidURLError: URL is missing or blank
        """
        url = (long_url or "").strip()
        if not url:
            raise InvalidURLError("URL is required")
        
        if self.normalize_urls and not url.lower().startswith(RECOGNIZED_SCHEMES):
            url = self.default_scheme + url
        return url

    def create_link(self, long_url: Optional[str]) -> Link:
        """
        Create a new short link.
        
        Always creates a new record, even if the long URL was shortened before.
        
        Process:
        1. Validate and normalize the URL (no database access on failure)
        2. Generate a candidate code, skip it if already taken
        3. Insert; a unique-constraint violation means another request took
           the code between check and insert, so go back to step 2
        
        Raises:
            InvalidURLError: URL is missing or blank
            ShortCodeExhaustedError: no unused code found in max_retries attempts
            StorageError: any other database failure
        """
        url = self.normalize_url(long_url)
        
        for attempt in range(1, self.max_retries + 1):
            short_code = self.short_code_strategy.generate()
            
            if self._code_exists(short_code):
                logger.warning("Short code collision on %s (attempt %d)", short_code, attempt)
                continue
            
            link = Link(short_code=short_code, long_url=url, click_count=0)
            try:
                self.db.add(link)
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                if not self._code_exists(short_code):
                    logger.error("Insert of %s violated a constraint: %s", short_code, e)
                    raise StorageError("Failed to create short URL") from e
                logger.warning(
                    "Short code %s was taken concurrently (attempt %d)", short_code, attempt
                )
                continue
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error("Failed to insert link %s: %s", short_code, e)
                raise StorageError("Failed to create short URL") from e
            
            try:
                # Loads server defaults (created_at) for the response
                self.db.refresh(link)
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error("Failed to reload link %s after insert: %s", short_code, e)
                raise StorageError("Failed to create short URL") from e

            logger.info("Created short link %s -> %s", link.short_code, link.long_url)
            return link
        
        logger.error("Gave up generating a short code after %d attempts", self.max_retries)
        raise ShortCodeExhaustedError(self.max_retries)

    def resolve(self, short_code: str) -> str:
        """
        Get the long URL for a redirect and count the click.
        
        The increment and the lookup are a single UPDATE ... RETURNING,
        so there is no read-modify-write for concurrent calls to race on.
        
        Raises:
            LinkNotFoundError: no link has this code (nothing is written)
            StorageError: database failure
        """
        stmt = (
            update(Link)
            .where(Link.short_code == short_code)
            .values(click_count=Link.click_count + 1)
            .returning(Link.long_url)
            .execution_options(synchronize_session=False)
        )
        try:
            long_url = self.db.execute(stmt).scalar_one_or_none()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to resolve %s: %s", short_code, e)
            raise StorageError("Failed to resolve short URL") from e
        
        if long_url is None:
            raise LinkNotFoundError(short_code)
        return long_url

    def get_stats(self, short_code: str) -> Link:
        """
        Get the full record for a short code, read fresh from the database.
        
        Raises:
            LinkNotFoundError: no link has this code
            StorageError: database failure
        """
        stmt = (
            select(Link)
            .where(Link.short_code == short_code)
            .execution_options(populate_existing=True)
        )
        try:
            link = self.db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to load stats for %s: %s", short_code, e)
            raise StorageError("Failed to load short URL") from e
        
        if link is None:
            raise LinkNotFoundError(short_code)
        return link

    def _code_exists(self, short_code: str) -> bool:
        try:
            found = self.db.execute(
                select(Link.id).where(Link.short_code == short_code)
            ).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to check short code %s: %s", short_code, e)
            raise StorageError("Database error") from e
        return found is not None
