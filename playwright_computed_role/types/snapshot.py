"""Wire format of the page snapshot returned by the browser-side script."""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class InternalsSnapshot(BaseModel):
    """Role override an element declared through ``attachInternals()``."""
    model_config = ConfigDict(populate_by_name=True)

    role: Optional[str] = None
    aria_label: Optional[str] = Field(default=None, alias="ariaLabel")
    labelled_by: Optional[List[int]] = Field(default=None, alias="labelledBy")
    aria_description: Optional[str] = Field(default=None, alias="ariaDescription")
    described_by: Optional[List[int]] = Field(default=None, alias="describedBy")


class SnapshotNode(BaseModel):
    """One serialized node. ``type`` uses DOM nodeType numbers."""
    model_config = ConfigDict(populate_by_name=True)

    ref: int
    type: int
    tag: Optional[str] = None
    text: Optional[str] = None
    attributes: Dict[str, str] = Field(default_factory=dict)
    display: Optional[str] = None
    visibility: Optional[str] = None
    inert: bool = False
    value: Optional[str] = None
    children: List["SnapshotNode"] = Field(default_factory=list)
    shadow_root: Optional["SnapshotNode"] = Field(default=None, alias="shadowRoot")
    shadow_mode: str = Field(default="open", alias="shadowMode")
    assigned: Optional[List[int]] = None
    internals: Optional[InternalsSnapshot] = None


class DocumentSnapshot(BaseModel):
    """Whole-document snapshot plus the refs of the nodes to query under."""
    document: SnapshotNode
    roots: List[int] = Field(default_factory=list)


SnapshotNode.model_rebuild()
