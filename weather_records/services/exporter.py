"""
Export of the saved record collection into downloadable text documents.

CSV and XML output is produced by plain string formatting: quoted CSV
fields and XML element content are written as-is, without escaping. A
location containing `"`, `,`, `<` or `&` yields a document that strict
parsers may reject.
"""
import json
from datetime import datetime
from typing import Callable, Dict, List, Optional

from weather_records.core.errors import ValidationError
from weather_records.schemas.exports import ExportFormat, ExportResult
from weather_records.schemas.records import WeatherRecord

EMPTY_EXPORT_NOTICE = "No data to export"

CSV_HEADER = (
    "ID,Location,Latitude,Longitude,Start Date,End Date,"
    "Avg Max Temp (°C),Avg Min Temp (°C),Total Precipitation (mm),Saved At"
)

XML_FIELDS = (
    "id",
    "location",
    "latitude",
    "longitude",
    "startDate",
    "endDate",
    "avgMaxTemp",
    "avgMinTemp",
    "totalPrecipitation",
    "savedAt",
)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _scalars(record: WeatherRecord) -> Dict[str, str]:
    """Summary fields of a record rendered as text, keyed by their JSON name."""
    return {
        "id": record.id,
        "location": record.location,
        "latitude": f"{record.latitude}",
        "longitude": f"{record.longitude}",
        "startDate": record.start_date.isoformat(),
        "endDate": record.end_date.isoformat(),
        "avgMaxTemp": f"{record.avg_max_temp:.1f}",
        "avgMinTemp": f"{record.avg_min_temp:.1f}",
        "totalPrecipitation": f"{record.total_precipitation:.1f}",
        "savedAt": record.saved_at.isoformat(),
    }


def to_json(records: List[WeatherRecord], now: datetime) -> str:
    return json.dumps(
        [r.model_dump(mode="json", by_alias=True) for r in records],
        indent=2,
        ensure_ascii=False,
    )


def to_csv(records: List[WeatherRecord], now: datetime) -> str:
    lines = [CSV_HEADER]
    for record in records:
        f = _scalars(record)
        lines.append(
            f'"{f["id"]}","{f["location"]}",{f["latitude"]},{f["longitude"]},'
            f'{f["startDate"]},{f["endDate"]},{f["avgMaxTemp"]},{f["avgMinTemp"]},'
            f'{f["totalPrecipitation"]},"{f["savedAt"]}"'
        )
    return "\n".join(lines) + "\n"


def to_xml(records: List[WeatherRecord], now: datetime) -> str:
    parts = ['<?xml version="1.0" encoding="UTF-8"?>', "<weatherRecords>"]
    for record in records:
        f = _scalars(record)
        parts.append("  <record>")
        parts.extend(f"    <{name}>{f[name]}</{name}>" for name in XML_FIELDS)
        parts.append("  </record>")
    parts.append("</weatherRecords>")
    return "\n".join(parts)


def to_markdown(records: List[WeatherRecord], now: datetime) -> str:
    out = [
        "# Weather Data Export",
        "",
        f"**Total Records:** {len(records)}",
        "",
        f"**Exported:** {now.strftime(TIMESTAMP_FORMAT)}",
        "",
        "---",
        "",
    ]
    for record in records:
        f = _scalars(record)
        out += [
            f"## {record.location}",
            "",
            f"- **Date Range:** {f['startDate']} to {f['endDate']}",
            f"- **Coordinates:** {f['latitude']}°N, {f['longitude']}°E",
            f"- **Average Max Temperature:** {f['avgMaxTemp']}°C",
            f"- **Average Min Temperature:** {f['avgMinTemp']}°C",
            f"- **Total Precipitation:** {f['totalPrecipitation']}mm",
            f"- **Saved:** {record.saved_at.astimezone().strftime(TIMESTAMP_FORMAT)}",
            "",
            "---",
            "",
        ]
    return "\n".join(out)


# format -> (renderer, mime type, filename)
RENDERERS: Dict[ExportFormat, tuple[Callable[[List[WeatherRecord], datetime], str], str, str]] = {
    ExportFormat.JSON: (to_json, "application/json", "weather_data.json"),
    ExportFormat.CSV: (to_csv, "text/csv", "weather_data.csv"),
    ExportFormat.XML: (to_xml, "application/xml", "weather_data.xml"),
    ExportFormat.MARKDOWN: (to_markdown, "text/markdown", "weather_data.md"),
}


def export_records(records: List[WeatherRecord], fmt: str, now: Optional[datetime] = None) -> ExportResult:
    """
    Render `records` in the requested format.

    An empty collection is not an error: the result carries a notice and
    no content.

    Raises:
        ValidationError: `fmt` is not one of json, csv, xml, markdown.
    """
    try:
        export_format = ExportFormat(fmt)
    except ValueError:
        raise ValidationError(f"Unsupported export format: {fmt}")

    if not records:
        return ExportResult(notice=EMPTY_EXPORT_NOTICE)

    render, mime_type, filename = RENDERERS[export_format]
    content = render(records, now or datetime.now())
    return ExportResult(content=content, mime_type=mime_type, filename=filename)
