# RU: Доменная модель штрихкода EAN-13: конфигурация рендеринга, явный кэш раскладки (prepare), результат "изображение или ошибка".
# EN: EAN-13 domain object: render configuration, explicit layout cache (prepare), and an image-or-error result with optional error recording.

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, ClassVar, Dict, Mapping, Optional

from PIL import Image

from ean13_renderer.barcodegen.ean13_encoder import encode
from ean13_renderer.barcodegen.errors import BarcodeGenError
from ean13_renderer.barcodegen.layout_cache import LayoutCache, LayoutKey
from ean13_renderer.barcodegen.raster_renderer import (
    BarcodeLayout,
    ColorSpec,
    compute_layout,
    normalize_color,
    paint,
)

from .enums import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_BAR_COLOR,
    DEFAULT_HEIGHT,
    DEFAULT_SCALE,
    ErrorKind,
)

logger = logging.getLogger(__name__)

__all__ = ["RenderOptions", "RenderResult", "EAN13Barcode"]

_UNSET: Any = object()


def _freeze_color(value: Any) -> Any:
    # JSON hands colors back as lists
    return tuple(value) if isinstance(value, list) else value


@dataclass(frozen=True)
class RenderOptions:
    """
    Snapshot of the rendering parameters.

    Values are not checked on construction; `EAN13Barcode.validate` and
    every render call reject malformed ones with InvalidParameterError.
    """

    scale: float = DEFAULT_SCALE
    height: float = DEFAULT_HEIGHT
    bar_color: ColorSpec = DEFAULT_BAR_COLOR
    background_color: ColorSpec = DEFAULT_BACKGROUND_COLOR

    def __post_init__(self) -> None:
        object.__setattr__(self, "bar_color", _freeze_color(self.bar_color))
        object.__setattr__(
            self, "background_color", _freeze_color(self.background_color)
        )

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "RenderOptions":
        """Build options from a `load_config()` dict, ignoring unrelated keys."""
        return cls(
            scale=config.get("scale", DEFAULT_SCALE),
            height=config.get("height", DEFAULT_HEIGHT),
            bar_color=config.get("bar_color", DEFAULT_BAR_COLOR),
            background_color=config.get("background_color", DEFAULT_BACKGROUND_COLOR),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RenderResult:
    """Outcome of a render: exactly one of `image` and `error` is set."""

    image: Optional[Image.Image] = None
    error: Optional[BarcodeGenError] = None

    def __post_init__(self) -> None:
        if (self.image is None) == (self.error is None):
            raise ValueError("RenderResult needs exactly one of image or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> Image.Image:
        """Return the image or raise the recorded error."""
        if self.error is not None:
            raise self.error
        if self.image is None:
            raise ValueError("RenderResult holds neither image nor error")
        return self.image


@dataclass
class EAN13Barcode:
    """
    Domain-level EAN-13 / UPC-A barcode with:
        - Immutable RenderOptions snapshot, replaced through `configure`
        - Explicit layout cache: `prepare()` fills it, `configure` drops it
          when digits, scale or height change
        - GUI-/API-friendly: errors recordable instead of throwing

    Examples (integration):
        bc = EAN13Barcode(barcode="4006381333931")
        bc.configure(scale=3.0, height=80)
        bc.prepare()
        img = bc.barcode_image
        if img is None:
            print(bc.validation_error_message)
    """

    schema_version: ClassVar[str] = "1.0"

    barcode: Optional[str] = None
    options: RenderOptions = field(default_factory=RenderOptions)

    validation_state: Optional[str] = None
    validation_error_message: Optional[str] = None
    last_error: Optional[BarcodeGenError] = field(default=None, compare=False)

    cache: LayoutCache = field(
        default_factory=LayoutCache, init=False, repr=False, compare=False
    )

    # ---- Configuration ----

    def configure(
        self,
        *,
        barcode: Any = _UNSET,
        scale: Any = _UNSET,
        height: Any = _UNSET,
        bar_color: Any = _UNSET,
        background_color: Any = _UNSET,
    ) -> "EAN13Barcode":
        """
        Replace any subset of the configuration and return self.

        Passing None for a color restores its default. The layout cache is
        invalidated here, and only here, when a geometry input changes.
        """
        changes: Dict[str, Any] = {}
        if scale is not _UNSET:
            changes["scale"] = scale
        if height is not _UNSET:
            changes["height"] = height
        if bar_color is not _UNSET:
            changes["bar_color"] = (
                DEFAULT_BAR_COLOR if bar_color is None else bar_color
            )
        if background_color is not _UNSET:
            changes["background_color"] = (
                DEFAULT_BACKGROUND_COLOR
                if background_color is None
                else background_color
            )

        new_options = replace(self.options, **changes) if changes else self.options
        new_barcode = self.barcode if barcode is _UNSET else barcode

        if (
            new_barcode != self.barcode
            or new_options.scale != self.options.scale
            or new_options.height != self.options.height
        ):
            self.cache.invalidate()

        self.barcode = new_barcode
        self.options = new_options
        return self

    @classmethod
    def from_config(
        cls, config: Mapping[str, Any], barcode: Optional[str] = None
    ) -> "EAN13Barcode":
        return cls(barcode=barcode, options=RenderOptions.from_config(config))

    # ---- Rendering ----

    def _cache_key(self) -> LayoutKey:
        return LayoutKey(self.barcode or "", self.options.scale, self.options.height)

    def _layout(self) -> BarcodeLayout:
        key = self._cache_key()
        layout = self.cache.get(key)
        if layout is None:
            sequence = encode(self.barcode)  # type: ignore[arg-type]
            layout = compute_layout(sequence, self.options.scale, self.options.height)
            self.cache.store(key, layout)
        return layout

    def prepare(self) -> bool:
        """
        Encode and lay out the barcode now so a later render only paints.

        Returns:
            True if the layout is cached; False if the configuration is
            invalid (the error is recorded, not raised).
        """
        try:
            self._layout()
        except BarcodeGenError as ex:
            self._record_error(ex)
            return False
        self._clear_error()
        return True

    def render(self) -> Image.Image:
        """
        Render the current configuration.

        Raises:
            EncodeError: the digits are malformed or the check digit is wrong.
            InvalidParameterError: scale, height or a color is malformed.
        """
        layout = self._layout()
        return paint(layout, self.options.bar_color, self.options.background_color)

    def render_result(self) -> RenderResult:
        """Render without raising domain errors."""
        try:
            img = self.render()
        except BarcodeGenError as ex:
            self._record_error(ex)
            return RenderResult(error=ex)
        self._clear_error()
        return RenderResult(image=img)

    @property
    def barcode_image(self) -> Optional[Image.Image]:
        """Image for the current configuration, or None with `last_error` set."""
        return self.render_result().image

    # ---- Validation ----

    def _record_error(self, ex: BarcodeGenError) -> None:
        kind = ex.kind.localized_name("en") if ex.kind is not None else "Barcode error"
        logger.warning("%s: %s", kind, ex)
        self.last_error = ex
        self.validation_state = "invalid"
        self.validation_error_message = str(ex)

    def _clear_error(self) -> None:
        self.last_error = None
        self.validation_state = "ok"
        self.validation_error_message = None

    def validate(self, record_error: bool = False) -> bool:
        """
        Validates the barcode object:
        - Digits: characters, length, check digit
        - Scale and height: positive, finite, within the pixel limit
        - Colors: parseable by Pillow
        - If record_error: on error, sets self.validation_error_message instead of raising

        Returns: True if ok, False if error (when record_error)
        Raises: BarcodeGenError subclass if error and not record_error
        """
        logger.info("Validating EAN13Barcode: barcode=%r", self.barcode)
        try:
            sequence = encode(self.barcode)  # type: ignore[arg-type]
            compute_layout(sequence, self.options.scale, self.options.height)
            normalize_color(self.options.bar_color)
            normalize_color(self.options.background_color)
        except BarcodeGenError as ex:
            self._record_error(ex)
            if record_error:
                return False
            raise
        self._clear_error()
        return True

    # ---- Serialization ----

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "barcode": self.barcode,
            "options": self.options.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "EAN13Barcode":
        d = dict(d)
        if "schema_version" in d and d["schema_version"] != cls.schema_version:
            logger.warning(
                "Schema version mismatch (expected %s, got %s)",
                cls.schema_version,
                d["schema_version"],
            )
        options = dict(d.get("options") or {})
        known = {f.name for f in fields(RenderOptions)}
        unknown = sorted(set(options) - known)
        if unknown:
            logger.warning("Ignoring unknown render options: %s", ", ".join(unknown))
            options = {k: v for k, v in options.items() if k in known}
        return cls(barcode=d.get("barcode"), options=RenderOptions(**options))

    def __str__(self) -> str:
        return (
            f"EAN13Barcode({self.barcode}, scale={self.options.scale}, "
            f"height={self.options.height})"
        )
