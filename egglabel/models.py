"""Data models for decoded egg stamp records."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime

from .codes import (
    CATEGORY_VALUES,
    COUNTRY_VALUES,
    HOUSING_VALUES,
    UNKNOWN,
    parse,
)
from .expiry import compute_expiry


@dataclass
class Record:
    """One decoded stamp code plus its classification and metadata."""

    identifier: str
    raw_code: str
    category: str
    housing: str = UNKNOWN
    country: str = UNKNOWN
    factory: str = UNKNOWN
    packing_date: date | None = None
    expiry_date: date | None = None
    check_date: datetime = field(default_factory=datetime.now)
    is_favorite: bool = False

    @classmethod
    def create(
        cls,
        code: str,
        packing_date: date | None = None,
        *,
        now: datetime | None = None,
    ) -> Record:
        """Decode ``code`` and build a new record with a fresh identifier."""
        info = parse(code)
        expiry = compute_expiry(packing_date) if packing_date is not None else None
        if isinstance(packing_date, datetime):
            packing_date = packing_date.date()
        return cls(
            identifier=uuid.uuid4().hex,
            raw_code=code,
            category=info.category,
            housing=info.housing,
            country=info.country,
            factory=info.factory,
            packing_date=packing_date,
            expiry_date=expiry,
            check_date=now or datetime.now(),
        )

    def to_dict(self) -> dict:
        data = {
            "identifier": self.identifier,
            "raw_code": self.raw_code,
            "category": self.category,
            "housing": self.housing,
            "country": self.country,
            "factory": self.factory,
            "packing_date": self.packing_date.isoformat() if self.packing_date else None,
        }
        if self.expiry_date is not None:
            data["expiry_date"] = self.expiry_date.isoformat()
        data["check_date"] = self.check_date.isoformat()
        data["is_favorite"] = self.is_favorite
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Record:
        """Rebuild a record from :meth:`to_dict` output.

        Raises:
            ValueError: If a field is missing or outside its allowed values.
        """
        try:
            identifier = data["identifier"]
            raw_code = data["raw_code"]
            category = data["category"]
            housing = data["housing"]
            country = data["country"]
            factory = data["factory"]
            check_date = datetime.fromisoformat(data["check_date"])
            packing_raw = data.get("packing_date")
            expiry_raw = data.get("expiry_date")
            packing_date = date.fromisoformat(packing_raw) if packing_raw else None
            expiry_date = date.fromisoformat(expiry_raw) if expiry_raw else None
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"invalid record: {e}") from e

        if not isinstance(identifier, str) or not identifier:
            raise ValueError("invalid record: empty identifier")
        if not isinstance(raw_code, str) or not isinstance(factory, str):
            raise ValueError("invalid record: code and factory must be strings")
        if category not in CATEGORY_VALUES:
            raise ValueError(f"invalid record: unknown category {category!r}")
        if housing not in HOUSING_VALUES:
            raise ValueError(f"invalid record: unknown housing {housing!r}")
        if country not in COUNTRY_VALUES:
            raise ValueError(f"invalid record: unknown country {country!r}")
        expected = compute_expiry(packing_date) if packing_date is not None else None
        if expiry_date != expected:
            raise ValueError("invalid record: expiry does not match packing date")
        is_favorite = data.get("is_favorite", False)
        if not isinstance(is_favorite, bool):
            raise ValueError(f"invalid record: is_favorite must be a boolean, got {is_favorite!r}")

        return cls(
            identifier=identifier,
            raw_code=raw_code,
            category=category,
            housing=housing,
            country=country,
            factory=factory,
            packing_date=packing_date,
            expiry_date=expiry_date,
            check_date=check_date,
            is_favorite=is_favorite,
        )
