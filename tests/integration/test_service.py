"""
Integration tests for FileQAService: single uploads, folder rebuilds and
answering over the aggregate context.
"""

import asyncio
import io
import pytest
from fileqa.core.errors import EmptyContext, GenerationError, ReadError, TransportError, UnsupportedFormat
from fileqa.service import FileQAService

PEOPLE_CSV = b"name,age\nAnn,30\nBob,25\n"


class TestIngestSingle:
    """Single-file ingestion appends to the context."""
    
    def test_people_csv_normalized(self, service):
        dataset = asyncio.run(service.ingest_single("people.csv", PEOPLE_CSV, "people.csv"))
        
        assert dataset.provenance == "people.csv"
        assert dataset.format == "csv"
        assert list(dataset.records) == [
            {"name": "ANN", "age": "30"},
            {"name": "BOB", "age": "25"},
        ]
    
    def test_text_source_lines(self, service):
        dataset = asyncio.run(service.ingest_single("notes", b"Total: 42\n", "text/plain"))
        
        assert list(dataset.records) == [{"text": "TOTAL: 42"}, {"text": ""}]
    
    def test_file_like_source(self, service):
        dataset = asyncio.run(service.ingest_single("people.csv", io.BytesIO(PEOPLE_CSV), "csv"))
        
        assert dataset.record_count == 2
    
    def test_appends_without_clearing(self, service):
        asyncio.run(service.ingest_single("one.csv", PEOPLE_CSV, "csv"))
        asyncio.run(service.ingest_single("two.txt", b"hello", "txt"))
        
        assert [d.provenance for d in service.context] == ["one.csv", "two.txt"]
    
    def test_unsupported_format_leaves_context_untouched(self, service):
        asyncio.run(service.ingest_single("one.csv", PEOPLE_CSV, "csv"))
        
        with pytest.raises(UnsupportedFormat):
            asyncio.run(service.ingest_single("photo.png", b"\x89PNG", "image/png"))
        
        assert len(service.context) == 1
    
    def test_read_error_leaves_context_untouched(self, service):
        with pytest.raises(ReadError):
            asyncio.run(service.ingest_single("broken.xlsx", b"not a workbook", "broken.xlsx"))
        
        assert service.context.is_empty


class TestIngestRemote:
    """A single Drive file fetched by id is appended to the context."""
    
    def test_appends_downloaded_file(self, service, provider):
        asyncio.run(service.ingest_single("one.csv", PEOPLE_CSV, "csv"))
        
        dataset = asyncio.run(service.ingest_remote("2"))
        
        assert dataset.provenance == "b.csv"
        assert dataset.source_id == "2"
        assert list(dataset.records) == [{"city": "OSLO"}]
        assert [d.provenance for d in service.context] == ["one.csv", "b.csv"]
        assert provider.downloaded == ["2"]
    
    def test_name_with_slash_uses_extension(self, make_provider, generator):
        provider = make_provider(files=[("7", "q1/csv-export.txt", b"Total: 42")])
        service = FileQAService(provider=provider, generate=generator)
        
        dataset = asyncio.run(service.ingest_remote("7"))
        
        assert dataset.format == "txt"
        assert list(dataset.records) == [{"text": "TOTAL: 42"}]
    
    def test_download_failure_leaves_context_untouched(self, service):
        asyncio.run(service.ingest_single("one.csv", PEOPLE_CSV, "csv"))
        
        with pytest.raises(TransportError):
            asyncio.run(service.ingest_remote("missing"))
        
        assert len(service.context) == 1
    
    def test_requires_provider(self, generator):
        service = FileQAService(generate=generator)
        
        with pytest.raises(TransportError):
            asyncio.run(service.ingest_remote("1"))


class TestIngestBatch:
    """Folder rebuilds replace the context and isolate per-file failures."""
    
    def test_provenance_and_order_follow_listing(self, service):
        result = asyncio.run(service.ingest_batch("folder"))
        
        assert [d.provenance for d in result.datasets] == ["a.csv", "b.csv"]
        assert [d.source_id for d in result.datasets] == ["1", "2"]
        assert result.failures == ()
        assert service.context.datasets == result.datasets
    
    def test_failed_download_omitted(self, make_provider, generator):
        """Folder [a.csv, b.csv] where b.csv cannot be downloaded."""
        provider = make_provider(
            files=[("1", "a.csv", PEOPLE_CSV), ("2", "b.csv", PEOPLE_CSV)],
            failing_ids=("2",)
        )
        service = FileQAService(provider=provider, generate=generator)
        
        result = asyncio.run(service.ingest_batch("folder"))
        
        assert [d.provenance for d in result.datasets] == ["a.csv"]
        assert len(result.failures) == 1
        failure = result.failures[0]
        assert (failure.file_id, failure.file_name, failure.error_kind) == ("2", "b.csv", "TRANSPORT_ERROR")
        assert result.files_listed == 2
    
    def test_one_bad_file_among_many(self, make_provider, generator):
        provider = make_provider(files=[
            ("1", "a.csv", PEOPLE_CSV),
            ("2", "image.png", b"\x89PNG"),
            ("3", "broken.xlsx", b"garbage"),
            ("4", "d.txt", b"line"),
        ])
        service = FileQAService(provider=provider, generate=generator)
        
        result = asyncio.run(service.ingest_batch("folder"))
        
        assert [d.provenance for d in result.datasets] == ["a.csv", "d.txt"]
        assert {f.file_name: f.error_kind for f in result.failures} == {
            "image.png": "UNSUPPORTED_FORMAT",
            "broken.xlsx": "READ_ERROR",
        }
    
    def test_order_independent_of_completion(self, make_provider, generator):
        provider = make_provider(
            files=[("1", "slow.csv", PEOPLE_CSV), ("2", "fast.csv", PEOPLE_CSV)],
            delays={"1": 0.2}
        )
        service = FileQAService(provider=provider, generate=generator)
        
        result = asyncio.run(service.ingest_batch("folder"))
        
        assert [d.provenance for d in result.datasets] == ["slow.csv", "fast.csv"]
    
    def test_rebuild_replaces_uploaded_data(self, service):
        asyncio.run(service.ingest_single("local.csv", PEOPLE_CSV, "csv"))
        
        asyncio.run(service.ingest_batch("folder"))
        
        assert [d.provenance for d in service.context] == ["a.csv", "b.csv"]
    
    def test_listing_failure_propagates_and_keeps_context(self, make_provider, generator):
        service = FileQAService(provider=make_provider(listing_error=True), generate=generator)
        asyncio.run(service.ingest_single("local.csv", PEOPLE_CSV, "csv"))
        
        with pytest.raises(TransportError):
            asyncio.run(service.ingest_batch("folder"))
        
        assert [d.provenance for d in service.context] == ["local.csv"]
    
    def test_without_provider(self, generator):
        with pytest.raises(TransportError):
            asyncio.run(FileQAService(generate=generator).ingest_batch("folder"))
    
    def test_reader_sees_previous_or_next_context_only(self, make_provider, generator):
        """A question during a rebuild sees the old context, not a partial one."""
        provider = make_provider(
            files=[("1", "a.csv", PEOPLE_CSV), ("2", "b.csv", PEOPLE_CSV)],
            delays={"2": 0.3}
        )
        service = FileQAService(provider=provider, generate=generator)
        asyncio.run(service.ingest_single("old.csv", PEOPLE_CSV, "csv"))
        
        async def scenario():
            rebuild = asyncio.create_task(service.ingest_batch("folder"))
            await asyncio.sleep(0.1)
            during = [d.provenance for d in service.context]
            await rebuild
            return during, [d.provenance for d in service.context]
        
        during, after = asyncio.run(scenario())
        
        assert during == ["old.csv"]
        assert after == ["a.csv", "b.csv"]


class TestUploadAndIngest:
    """Uploads stored in the remote folder first."""
    
    def test_uploaded_then_appended(self, service, provider):
        dataset = asyncio.run(service.upload_and_ingest("new.csv", PEOPLE_CSV, "text/csv", "folder"))
        
        assert provider.uploaded[0].name == "new.csv"
        assert dataset.provenance == "new.csv"
        assert dataset.source_id == provider.uploaded[0].id
        assert [d.provenance for d in service.context] == ["new.csv"]


class TestAsk:
    """Answering over the current context."""
    
    def test_empty_context_guard(self, service, generator):
        with pytest.raises(EmptyContext):
            asyncio.run(service.ask("What is total?"))
        
        assert generator.prompts == []
    
    def test_returns_backend_output(self, service, generator):
        asyncio.run(service.ingest_single("people.csv", PEOPLE_CSV, "csv"))
        
        assert asyncio.run(service.ask("What is total?")) == generator.answer
        assert "What is total?" in generator.prompts[0]
        assert '"name": "ANN"' in generator.prompts[0]
    
    def test_backend_failure_wrapped(self, provider, make_generator):
        fault = ConnectionError("backend down")
        service = FileQAService(provider=provider, generate=make_generator(error=fault))
        asyncio.run(service.ingest_single("people.csv", PEOPLE_CSV, "csv"))
        
        with pytest.raises(GenerationError) as excinfo:
            asyncio.run(service.ask("What is total?"))
        
        assert excinfo.value.__cause__ is fault
    
    def test_independent_services_do_not_share_context(self, provider, generator):
        first = FileQAService(provider=provider, generate=generator)
        second = FileQAService(provider=provider, generate=generator)
        asyncio.run(first.ingest_single("people.csv", PEOPLE_CSV, "csv"))
        
        with pytest.raises(EmptyContext):
            asyncio.run(second.ask("q"))
