"""Font resource loading.

A FontResource parses the font once with fontTools, which validates the
file and provides the vertical metrics used for line height, and opens
Pillow FreeType faces on demand for glyph coverage. Pillow is opened with
its BASIC layout engine: text arrives already in visual order and must not
be reordered or shaped a second time.
"""

from io import BytesIO
from pathlib import Path

from fontTools.ttLib import TTFont
from PIL import ImageFont

from epl_label.exceptions import FontLoadError

REQUIRED_TABLES = ("head", "hhea", "cmap")


class FontResource:
    """A parsed, read-only font shared across label builds.

    Example:
        font = FontResource.from_path(Path("Amiri-Bold.ttf"))
        face = font.image_font(42)
    """

    def __init__(self, data: bytes, name: str = "<memory>") -> None:
        """Parse font data.

        Args:
            data: Raw TTF/OTF bytes
            name: Label used in error messages and logs

        Raises:
            FontLoadError: If the data is not a usable font
        """
        self._data = data
        self._name = name
        self._faces: dict[int, ImageFont.FreeTypeFont] = {}

        try:
            tt = TTFont(BytesIO(data), lazy=False)
            missing = [tag for tag in REQUIRED_TABLES if tag not in tt]
            if missing:
                raise ValueError(f"missing tables: {', '.join(missing)}")
            self._units_per_em = int(tt["head"].unitsPerEm)
            self._ascender = int(tt["hhea"].ascent)
            self._descender = int(tt["hhea"].descent)
            self._glyph_count = len(tt.getGlyphOrder())
            self._cmap = dict(tt.getBestCmap() or {})
            self._family_name = tt["name"].getBestFamilyName() if "name" in tt else None
            tt.close()
        except FontLoadError:
            raise
        except Exception as e:
            raise FontLoadError(name, str(e)) from e

        # Fail now rather than on the first paint
        self.image_font(12)

    @classmethod
    def from_bytes(cls, data: bytes, name: str = "<memory>") -> "FontResource":
        """Create a font resource from raw bytes."""
        return cls(data, name)

    @classmethod
    def from_path(cls, path: Path) -> "FontResource":
        """Load a font resource from a file.

        Raises:
            FontLoadError: If the file cannot be read or parsed
        """
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise FontLoadError(str(path), str(e)) from e
        return cls(data, str(path))

    @property
    def name(self) -> str:
        return self._name

    @property
    def units_per_em(self) -> int:
        """Font units per em."""
        return self._units_per_em

    @property
    def ascender(self) -> int:
        """hhea ascender in font units."""
        return self._ascender

    @property
    def descender(self) -> int:
        """hhea descender in font units (usually negative)."""
        return self._descender

    @property
    def glyph_count(self) -> int:
        return self._glyph_count

    @property
    def family_name(self) -> str | None:
        return self._family_name

    def supports(self, text: str) -> bool:
        """Check whether every non-space character of text has a glyph."""
        return all(ord(ch) in self._cmap for ch in text if not ch.isspace())

    def missing_characters(self, text: str) -> list[str]:
        """Characters of text the font has no glyph for."""
        return sorted({ch for ch in text if not ch.isspace() and ord(ch) not in self._cmap})

    def image_font(self, size_px: int) -> ImageFont.FreeTypeFont:
        """Get a Pillow face at a pixel size, cached per size.

        Raises:
            FontLoadError: If FreeType cannot open the font
        """
        face = self._faces.get(size_px)
        if face is None:
            try:
                face = ImageFont.truetype(
                    BytesIO(self._data),
                    size=size_px,
                    layout_engine=ImageFont.Layout.BASIC,
                )
            except OSError as e:
                raise FontLoadError(self._name, str(e)) from e
            self._faces[size_px] = face
        return face
