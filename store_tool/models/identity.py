"""Application identity and submission data models"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass
class AppIdentity:
    """Store application record fields embedded into project manifests"""

    id: Optional[str] = None
    package_identity_name: Optional[str] = None
    publisher_name: Optional[str] = None
    primary_name: Optional[str] = None
    publisher_display_name: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        """Check if the store-assigned id is known"""
        return bool(self.id)

    def merged_with(self, other: Optional['AppIdentity']) -> 'AppIdentity':
        """Return a copy where empty fields are filled from ``other``"""
        if other is None:
            return AppIdentity(**asdict(self))

        values = asdict(self)
        for key, value in asdict(other).items():
            if not values.get(key):
                values[key] = value
        return AppIdentity(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {key: value for key, value in asdict(self).items() if value is not None}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'AppIdentity':
        """Create from dictionary, ignoring unknown keys"""
        data = data or {}
        return cls(
            id=data.get('id'),
            package_identity_name=data.get('package_identity_name'),
            publisher_name=data.get('publisher_name'),
            primary_name=data.get('primary_name'),
            publisher_display_name=data.get('publisher_display_name'),
        )


@dataclass
class SubmissionImage:
    """Listing image attached to a submission"""

    file_name: str
    image_type: str
    description: Optional[str] = None


@dataclass
class SubmissionData:
    """Minimal listing content for a first submission"""

    description: Optional[str]
    images: List[SubmissionImage] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'description': self.description,
            'images': [asdict(image) for image in self.images],
        }
