"""
Record references.

A ledger entry's trip reference arrives either as a raw id or as a populated
trip object. Both shapes are modelled here together with the one function
that reads an id out of them.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, model_validator


def coerce_identifier(value: Any) -> Optional[str]:
    """Normalize a scalar id (str or int) to a stripped string, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, str)):
        text = str(value).strip()
        return text or None
    return None


def extract_identifier(value: Any) -> Optional[str]:
    """
    Read an id from a raw scalar or a populated object.

    Populated objects may carry `_id` (document stores) or `id`; `_id` wins.
    """
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if isinstance(value, dict):
        return coerce_identifier(value.get("_id")) or coerce_identifier(value.get("id"))
    return coerce_identifier(value)


class PopulatedTripRef(BaseModel):
    """A trip reference that was expanded into (part of) the trip object."""
    id: Optional[str] = None
    lr_number: Optional[str] = Field(default=None, alias="lrNumber")

    class Config:
        populate_by_name = True
        extra = "ignore"

    @model_validator(mode="before")
    @classmethod
    def normalize_ids(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            data["id"] = extract_identifier(data)
            data.pop("_id", None)
            if "lrNumber" in data:
                data["lrNumber"] = coerce_identifier(data["lrNumber"])
        return data


# Tagged union: raw id or populated object
TripRef = Union[PopulatedTripRef, str]


def extract_trip_id(ref: Optional[TripRef]) -> Optional[str]:
    """
    Single normalization point for trip references.

    Returns:
        The referenced trip id, or None if the reference carries no usable id.
    """
    if ref is None:
        return None
    if isinstance(ref, PopulatedTripRef):
        return ref.id
    return extract_identifier(ref)
