"""
Listing Form Controller

Drives the "post a listing" form: Editing -> Submitting -> Success | Failed.
A submission uploads the selected images first and only then creates the
listing record. The draft is cleared and the user navigated away only after
the create call succeeds; on any failure the draft stays as entered.
"""

import enum
import logging
from typing import Callable, Dict, List, Optional, Sequence

from .draft import DraftForm, parse_draft
from .errors import MarketplaceError
from .image_uploader import ImageFile, ImageUploader
from .models.listing import Listing
from .repository import ListingRepository

logger = logging.getLogger(__name__)


class FormStatus(enum.Enum):
    EDITING = 'editing'
    SUBMITTING = 'submitting'
    SUCCESS = 'success'
    FAILED = 'failed'


class ListingFormController:
    def __init__(self, repository: ListingRepository, uploader: ImageUploader,
                 navigate: Callable[[str], None], home_path: str = '/'):
        self.repository = repository
        self.uploader = uploader
        self.navigate = navigate
        self.home_path = home_path

        self.form = DraftForm()
        self.files: List[ImageFile] = []
        self.status = FormStatus.EDITING
        self.outcome: Optional[FormStatus] = None
        self.error: Optional[str] = None
        self.field_errors: Dict[str, str] = {}
        self.last_created: Optional[Listing] = None

    @property
    def can_submit(self) -> bool:
        return self.status is not FormStatus.SUBMITTING

    def set_field(self, name: str, value: str) -> None:
        """Store raw input; coercion happens on submit."""
        if name not in DraftForm.field_names():
            raise KeyError(f"Unknown form field: {name}")
        setattr(self.form, name, value)

    def select_files(self, files: Optional[Sequence[ImageFile]]) -> None:
        self.files = list(files or [])

    def reset(self) -> None:
        self.form = DraftForm()
        self.files = []
        self.field_errors = {}
        self.error = None

    async def submit(self) -> Optional[Listing]:
        """
        Validate, upload images, then create the listing.

        Returns:
            The created listing, or None if the submission was rejected,
            failed, or another submission is already in flight
        """
        if not self.can_submit:
            logger.warning("Submission already in progress, ignoring submit")
            return None

        result = parse_draft(self.form)
        if not result.ok:
            self.field_errors = result.errors
            self.error = "Please correct the highlighted fields."
            self.outcome = FormStatus.FAILED
            logger.info(f"Draft rejected: {', '.join(sorted(result.errors))}")
            return None

        self.status = FormStatus.SUBMITTING
        self.error = None
        self.field_errors = {}

        try:
            image_urls = await self.uploader.upload_all(self.files)
            listing = await self.repository.create(result.draft.with_images(image_urls))
        except MarketplaceError as e:
            logger.error(f"Error creating listing: {e}")
            self.error = e.user_message
            # everything the user typed stays in the form
            self.outcome = FormStatus.FAILED
            return None
        finally:
            self.status = FormStatus.EDITING

        self.outcome = FormStatus.SUCCESS
        self.last_created = listing
        logger.info(f"Listing created successfully: {listing.id}")
        self.reset()
        self.navigate(self.home_path)
        return listing
