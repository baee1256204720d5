"""Box-model geometry carried by ``models.bin`` entries.

A document maps model names to pieces, pieces map part names to parts and
parts map box names to boxes. Every mapping is last-write-wins; the tree is
always rebuilt wholesale by whoever decodes it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional

__all__ = ["ModelBox", "ModelPart", "ModelPiece", "ModelDocument"]


def _pick(cls: type, data: Dict[str, Any]) -> Dict[str, Any]:
    # unknown keys are ignored, missing ones fall back to field defaults
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0", ""}


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError(f"not a boolean: {value!r}")
    return bool(value)


@dataclass(slots=True)
class ModelBox:
    position_x: float = 0.0
    position_y: float = 0.0
    position_z: float = 0.0
    length: int = 0
    width: int = 0
    height: int = 0
    uv_x: float = 0.0
    uv_y: float = 0.0
    scale: float = 0.0
    mirror: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelBox":
        box = cls(**_pick(cls, data))
        for name in ("length", "width", "height"):
            setattr(box, name, int(getattr(box, name)))
        for name in (
            "position_x",
            "position_y",
            "position_z",
            "uv_x",
            "uv_y",
            "scale",
        ):
            setattr(box, name, float(getattr(box, name)))
        box.mirror = _flag(box.mirror)
        return box


@dataclass(slots=True)
class ModelPart:
    unknown_float: float = 0.0
    translation_x: float = 0.0
    translation_y: float = 0.0
    translation_z: float = 0.0
    texture_offset_x: float = 0.0
    texture_offset_y: float = 0.0
    rotation_x: float = 0.0
    rotation_y: float = 0.0
    rotation_z: float = 0.0
    boxes: Dict[str, ModelBox] = field(default_factory=dict)

    def add_box(self, name: str, box: Optional[ModelBox] = None) -> ModelBox:
        box = box if box is not None else ModelBox()
        self.boxes[name] = box
        return box

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelPart":
        scalars = {
            k: float(v) for k, v in _pick(cls, data).items() if k != "boxes"
        }
        part = cls(**scalars)
        for box_name, box_data in (data.get("boxes") or {}).items():
            part.add_box(str(box_name), ModelBox.from_dict(box_data))
        return part


@dataclass(slots=True)
class ModelPiece:
    texture_width: int = 0
    texture_height: int = 0
    parts: Dict[str, ModelPart] = field(default_factory=dict)

    def add_part(self, name: str, part: Optional[ModelPart] = None) -> ModelPart:
        part = part if part is not None else ModelPart()
        self.parts[name] = part
        return part

    @property
    def box_count(self) -> int:
        return sum(len(p.boxes) for p in self.parts.values())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelPiece":
        piece = cls(
            texture_width=int(data.get("texture_width", 0)),
            texture_height=int(data.get("texture_height", 0)),
        )
        for part_name, part_data in (data.get("parts") or {}).items():
            piece.add_part(str(part_name), ModelPart.from_dict(part_data))
        return piece


@dataclass(slots=True)
class ModelDocument:
    pieces: Dict[str, ModelPiece] = field(default_factory=dict)

    def add_piece(
        self, name: str, piece: Optional[ModelPiece] = None
    ) -> ModelPiece:
        piece = piece if piece is not None else ModelPiece()
        self.pieces[name] = piece
        return piece

    def __len__(self) -> int:
        return len(self.pieces)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelDocument":
        doc = cls()
        for name, piece_data in data.items():
            doc.add_piece(str(name), ModelPiece.from_dict(piece_data))
        return doc

    def to_dict(self) -> Dict[str, Any]:
        return {name: asdict(piece) for name, piece in self.pieces.items()}
