"""Tag listing and creation."""

import re
import uuid

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from vidto.errors import StoreError, ValidationError
from vidto.logger import api_logger, db_logger
from vidto.models.tag import Tag
from vidto.schemas.tag import TagResponse

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


class TagService:
    """Service for the shared tag vocabulary."""

    def __init__(self, db: Session):
        self.db = db

    def list_tags(self) -> list[TagResponse]:
        """All tags, alphabetical by name."""
        try:
            tags = self.db.query(Tag).order_by(Tag.name.asc()).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            db_logger.error(f"Failed to list tags: {e}")
            raise StoreError(str(e)) from e
        return [TagResponse.model_validate(tag) for tag in tags]

    def create_tag(self, name: str, color: str) -> TagResponse:
        """
        Create a tag.

        Args:
            name: Unique, non-empty display name
            color: Hex color code (#RRGGBB)

        Raises:
            ValidationError: Empty or duplicate name, malformed color
        """
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Name is required", field="name")
        name = name.strip()
        if not isinstance(color, str) or not HEX_COLOR.match(color):
            raise ValidationError("Color must be a hex code like #3B82F6", field="color")

        try:
            if self.db.query(Tag.id).filter(Tag.name == name).first():
                raise ValidationError(f"Tag '{name}' already exists", field="name")
            tag = Tag(id=str(uuid.uuid4()), name=name, color=color)
            self.db.add(tag)
            self.db.commit()
        except ValidationError:
            self.db.rollback()
            raise
        except IntegrityError as e:
            # Lost a race against a concurrent insert of the same name
            self.db.rollback()
            raise ValidationError(f"Tag '{name}' already exists", field="name") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            db_logger.error(f"Failed to create tag: {e}")
            raise StoreError(str(e)) from e

        api_logger.info(f"Created tag {tag.id} ({tag.name})")
        return TagResponse.model_validate(tag)
