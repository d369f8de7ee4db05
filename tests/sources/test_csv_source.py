"""Tests for CsvSource with a mocked HTTP transport."""

import httpx
import pytest

from radar_spine.core.errors import ErrorKind
from radar_spine.core.settings import RadarSettings
from radar_spine.ingest import ingest_named_table
from radar_spine.sources.csv_file import CsvSource, parse_csv_content

URL = "https://example.com/files/tech%20radar.csv"

CSV_BODY = (
    "name,ring,quadrant,isNew,description\n"
    "Python,Adopt,languages,TRUE,Glue language\n"
    'Bazel,Assess,tools,false,"Build system, hermetic"\n'
)


def source_for(handler) -> CsvSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CsvSource(client=client)


class TestParseCsvContent:
    def test_columns_and_rows(self):
        columns, rows = parse_csv_content(CSV_BODY)
        assert columns == ["name", "ring", "quadrant", "isNew", "description"]
        assert len(rows) == 2
        assert rows[1]["description"] == "Build system, hermetic"

    def test_header_only(self):
        columns, rows = parse_csv_content("name,ring\n")
        assert columns == ["name", "ring"]
        assert rows == []

    def test_empty(self):
        assert parse_csv_content("") == ([], [])


class TestCsvSource:
    @pytest.mark.asyncio
    async def test_fetch_ok(self):
        source = source_for(lambda request: httpx.Response(200, text=CSV_BODY))
        result = await source.fetch(URL)

        assert result.is_ok()
        table = result.unwrap()
        assert table.title == "tech radar.csv"
        assert table.sheet_name == "CSV File"
        assert table.sheet_names == []
        assert len(table) == 2

    @pytest.mark.asyncio
    async def test_sheet_label_from_settings(self, monkeypatch):
        monkeypatch.setenv("RADAR_CSV_SHEET_LABEL", "Uploaded")
        source = source_for(lambda request: httpx.Response(200, text=CSV_BODY))
        table = (await source.fetch(URL)).unwrap()
        assert table.sheet_name == "Uploaded"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, kind",
        [
            (404, ErrorKind.SHEET_NOT_FOUND),
            (403, ErrorKind.FORBIDDEN),
            (500, ErrorKind.OTHER),
        ],
    )
    async def test_status_mapping(self, status, kind):
        source = source_for(lambda request: httpx.Response(status))
        result = await source.fetch(URL)

        assert result.is_err()
        assert result.error.kind is kind
        assert result.error.context.http_status == status
        assert result.error.context.source_kind == "csv"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = await source_for(handler).fetch(URL)
        assert result.is_err()
        assert result.error.kind is ErrorKind.OTHER
        assert isinstance(result.error.cause, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_byte_order_mark_is_dropped(self):
        body = "\ufeff" + CSV_BODY
        source = source_for(lambda request: httpx.Response(200, content=body.encode("utf-8")))
        table = (await source.fetch(URL)).unwrap()

        assert table.columns[0] == "name"
        assert table.rows[0]["name"] == "Python"
        ingest_named_table(table)

    def test_settings_injection(self):
        settings = RadarSettings(csv_sheet_label="Upload", http_timeout=5)
        source = CsvSource(settings=settings)
        assert source.sheet_label == "Upload"
        assert source.timeout == 5
