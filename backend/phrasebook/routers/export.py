"""Anki CSV export router."""

import csv
import io

from fastapi import APIRouter
from fastapi.responses import Response

from phrasebook.models import Phrase
from phrasebook.repositories import get_phrase_repository

router = APIRouter(prefix="/export", tags=["export"])

CSV_HEADER = ["Source Phrase", "Translation", "Tags"]
EXPORT_FILENAME = "phrases_anki_export.csv"


def phrases_to_csv(phrases: list[Phrase]) -> str:
    """Render phrases as Anki-importable CSV; every field is quoted, tags comma-joined."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for phrase in phrases:
        writer.writerow([phrase.sourcePhrase, phrase.translation, ",".join(sorted(phrase.tags))])
    return buffer.getvalue()


@router.get("/anki")
def export_anki() -> Response:
    # BOM so spreadsheet tools detect UTF-8
    content = "\ufeff" + phrases_to_csv(get_phrase_repository().list_all())
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
