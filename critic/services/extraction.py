"""
Content and metadata extraction for uploaded creative works

Metadata is best-effort: every parsing failure is downgraded to
"no metadata" and recorded on the result instead of being raised.
"""
import io
import math
from dataclasses import dataclass
from typing import Optional

import docx
import mutagen
import PyPDF2
from mutagen.mp3 import EasyMP3
from PIL import Image


CATEGORIES = ("writing", "art", "music")

ART_DESCRIPTION = (
    "An uploaded image file to be critiqued from a technical standpoint "
    "for composition, color, tone and technique"
)
MUSIC_DESCRIPTION = (
    "An uploaded audio file to be critiqued from a technical standpoint "
    "for melody, rhythm, harmony, beats and originality."
)

# Metadata status values
PRESENT = "present"
NO_DATA = "no_data"
PARSE_FAILED = "parse_failed"


class InvalidCategoryError(ValueError):
    """Raised for a category other than writing, art or music"""

    def __init__(self, category):
        self.category = category
        super().__init__("Invalid type. Must be music, art or writing.")


@dataclass
class MetadataResult:
    status: str
    description: Optional[str] = None
    error: Optional[str] = None

    @property
    def has_metadata(self) -> bool:
        return self.status == PRESENT and bool(self.description)

    @classmethod
    def present(cls, description: str) -> "MetadataResult":
        return cls(status=PRESENT, description=description)

    @classmethod
    def no_data(cls) -> "MetadataResult":
        return cls(status=NO_DATA)

    @classmethod
    def failed(cls, exc: Exception) -> "MetadataResult":
        return cls(status=PARSE_FAILED, error=f"{type(exc).__name__}: {exc}")


@dataclass
class ExtractionResult:
    content_description: str
    metadata: MetadataResult


def _is_pdf(buffer: bytes) -> bool:
    return buffer[:5] == b"%PDF-"


def extract_document_text(buffer: bytes) -> str:
    """
    Extract plain text from a DOCX or PDF document

    Args:
        buffer: Raw document bytes

    Returns:
        Extracted text
    """
    if _is_pdf(buffer):
        pdf_reader = PyPDF2.PdfReader(io.BytesIO(buffer))
        text = ""
        for page in pdf_reader.pages:
            text += (page.extract_text() or "") + "\n\n"
        return text.strip()

    document = docx.Document(io.BytesIO(buffer))
    return "\n".join(p.text for p in document.paragraphs)


def extract_writing_metadata(buffer: bytes) -> MetadataResult:
    """Documents never report metadata; parsing only checks they are readable"""
    try:
        extract_document_text(buffer)
    except Exception as e:
        return MetadataResult.failed(e)
    return MetadataResult.no_data()


def extract_art_metadata(buffer: bytes) -> MetadataResult:
    """Metadata is present when the image carries embedded EXIF data"""
    try:
        with Image.open(io.BytesIO(buffer)) as image:
            # PNG eXIf chunks after IDAT only show up in info once the image is loaded
            image.load()
            exif = image.info.get("exif")
    except Exception as e:
        return MetadataResult.failed(e)
    if exif:
        return MetadataResult.present("Image metadata available")
    return MetadataResult.no_data()


def _first_tag(tags, key) -> Optional[str]:
    if not tags:
        return None
    values = tags.get(key)
    if not values:
        return None
    if isinstance(values, (list, tuple)):
        values = values[0]
    value = str(values).strip()
    return value or None


def _round_seconds(length) -> int:
    # Half-up, so 2.5s reads as 3s
    if not length:
        return 0
    return int(math.floor(length + 0.5))


def format_music_metadata(title, artist, album, duration) -> str:
    return (
        f"Title: {title or 'unknown'}, Artist: {artist or 'Unknown'}, "
        f"Album: {album or 'Unknown'}, Duration: {_round_seconds(duration)}s"
    )


def _open_audio(buffer: bytes, media_type: str):
    fileobj = io.BytesIO(buffer)
    if media_type == "audio/mpeg":
        return EasyMP3(fileobj)
    audio = mutagen.File(fileobj, easy=True)
    if audio is None:
        raise ValueError(f"Unsupported audio container for {media_type}")
    return audio


def extract_music_metadata(buffer: bytes, media_type: str = "audio/mpeg") -> MetadataResult:
    """Read title/artist/album/duration tags from the audio container"""
    try:
        audio = _open_audio(buffer, media_type)
        title = _first_tag(audio.tags, "title")
        artist = _first_tag(audio.tags, "artist")
        album = _first_tag(audio.tags, "album")
        duration = getattr(audio.info, "length", None)
    except Exception as e:
        return MetadataResult.failed(e)

    if not (title or artist or album):
        return MetadataResult.no_data()
    return MetadataResult.present(format_music_metadata(title, artist, album, duration))


def extract_content(category: str, buffer: bytes, media_type: str = "audio/mpeg") -> ExtractionResult:
    """
    Build the content description and metadata for an uploaded work

    Args:
        category: "writing", "art" or "music"
        buffer: Raw file bytes
        media_type: Declared audio media type (music only)

    Returns:
        ExtractionResult with the content description and metadata

    Raises:
        InvalidCategoryError: for any other category
    """
    if category == "writing":
        return ExtractionResult(extract_document_text(buffer), extract_writing_metadata(buffer))
    if category == "art":
        return ExtractionResult(ART_DESCRIPTION, extract_art_metadata(buffer))
    if category == "music":
        return ExtractionResult(MUSIC_DESCRIPTION, extract_music_metadata(buffer, media_type))
    raise InvalidCategoryError(category)
