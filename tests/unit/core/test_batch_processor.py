"""Unit tests for BatchProcessor and the batch ledger it writes."""

import pytest

from conftest import MINIMAL_XLIFF, FakeTranslator, make_trans_unit
from brandvoice_xliff.core.batch_processor import (STATUS_ERROR, STATUS_SKIPPED, STATUS_SUCCESS,
                                                   BatchProcessor, BatchResult, job_key, new_batch_id)
from brandvoice_xliff.core.pipeline import XliffTranslationPipeline
from brandvoice_xliff.persistence.database import Database


def write_export(folder, name, target_language="en", source="Hola amigos"):
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / name
    body = make_trans_unit("1", source, "Paragraph")
    path.write_text(MINIMAL_XLIFF.format(target=target_language, units=body), encoding="utf-8")
    return path


@pytest.fixture
def exports(tmp_path):
    folder = tmp_path / "exports"
    write_export(folder, "home.xliff")
    write_export(folder / "blog", "post.xlf")
    return folder


@pytest.fixture
def database(tmp_path):
    db = Database(str(tmp_path / "data" / "batch.db"))
    yield db
    db.close()


@pytest.fixture
def translator():
    return FakeTranslator()


@pytest.fixture
def processor(translator, database, quiet_logger):
    pipeline = XliffTranslationPipeline(translator, logger=quiet_logger)
    return BatchProcessor(pipeline, database, skip_existing=False, logger=quiet_logger)


class TestHelpers:

    def test_job_key(self):
        assert job_key("home.xliff", "en") == "home.xliff_en"

    def test_batch_id_format(self):
        batch_id = new_batch_id()
        assert len(batch_id) == len("2024-01-31_12-00-00")
        assert batch_id[4] == "-" and batch_id[10] == "_"

    def test_success_rate_ignores_skips(self):
        result = BatchResult(batch_id="b", total_jobs=5, success_count=3, failed_count=1, skipped_count=1)
        assert result.success_rate == 0.75
        assert BatchResult(batch_id="b").success_rate == 0.0


class TestPlanJobs:

    def test_every_file_for_every_language(self, processor, exports):
        files = processor.discover(str(exports))
        jobs = processor.plan_jobs(files, ["en", "de"])
        assert len(jobs) == 4
        assert [language for _, language in jobs] == ["en", "de", "en", "de"]

    def test_auto_mode_uses_file_target(self, processor, tmp_path):
        folder = tmp_path / "auto"
        path = write_export(folder, "page.xliff", target_language="fr")
        assert processor.plan_jobs([str(path)]) == [(str(path), "fr")]

    def test_unreadable_file_planned_as_auto(self, processor, tmp_path):
        path = tmp_path / "broken.xliff"
        path.write_text("<xliff>", encoding="utf-8")
        assert processor.plan_jobs([str(path)]) == [(str(path), "auto")]


class TestProcess:

    def test_translates_into_each_language(self, processor, exports, tmp_path, database):
        output = tmp_path / "out"
        result = processor.process(str(exports), str(output), languages=["en", "de"], batch_id=None)

        assert (result.total_jobs, result.success_count, result.failed_count) == (4, 4, 0)
        assert (output / "en" / "home_en.xliff").exists()
        assert (output / "de" / "post_de.xliff").exists()
        jobs = database.get_jobs(result.batch_id)
        assert set(jobs) == {"home.xliff_en", "home.xliff_de", "post.xlf_en", "post.xlf_de"}
        assert {job['status'] for job in jobs.values()} == {STATUS_SUCCESS}

    def test_auto_language(self, processor, translator, tmp_path):
        folder = tmp_path / "exports"
        write_export(folder, "page.xliff", target_language="fr")
        output = tmp_path / "out"

        result = processor.process(str(folder), str(output))

        assert result.success_count == 1
        assert (output / "fr" / "page_fr.xliff").exists()
        assert {language for _, _, language, _ in translator.calls} == {"fr"}

    def test_batch_summary_stored(self, processor, exports, tmp_path, database):
        result = processor.process(str(exports), str(tmp_path / "out"), languages=["en"], batch_id="b1")

        batch = database.get_batch("b1")
        assert batch['status'] == "completed"
        assert batch['languages'] == ["en"]
        assert batch['summary']['success_count'] == 2
        assert result.metrics.translated == 2

    def test_failed_job_does_not_stop_batch(self, processor, exports, tmp_path, database):
        (exports / "broken.xliff").write_text("<xliff><file>", encoding="utf-8")

        result = processor.process(str(exports), str(tmp_path / "out"), languages=["en"], batch_id="b1")

        assert result.success_count == 2
        assert result.failed_count == 1
        assert result.failed_jobs[0].startswith("broken.xliff_en")
        job = database.get_jobs("b1")["broken.xliff_en"]
        assert job['status'] == STATUS_ERROR
        assert job['error']

    def test_skip_existing_outputs(self, translator, database, exports, tmp_path, quiet_logger):
        output = tmp_path / "out"
        (output / "en").mkdir(parents=True)
        (output / "en" / "home_en.xliff").write_text("done", encoding="utf-8")
        pipeline = XliffTranslationPipeline(translator, logger=quiet_logger)
        processor = BatchProcessor(pipeline, database, skip_existing=True, logger=quiet_logger)

        result = processor.process(str(exports), str(output), languages=["en"], batch_id="b1")

        assert (result.success_count, result.skipped_count) == (1, 1)
        assert (output / "en" / "home_en.xliff").read_text(encoding="utf-8") == "done"
        assert database.get_jobs("b1")["home.xliff_en"]['status'] == STATUS_SKIPPED


class TestResume:

    def test_recorded_jobs_not_rerun(self, processor, translator, exports, tmp_path):
        output = tmp_path / "out"
        processor.process(str(exports), str(output), languages=["en"], batch_id="b1")
        calls_after_first_run = len(translator.calls)

        result = processor.process(str(exports), str(output), languages=["en"], batch_id="b1")

        assert result.skipped_count == 2
        assert result.success_count == 0
        assert len(translator.calls) == calls_after_first_run

    def test_partial_batch_resumed(self, processor, translator, database, exports, tmp_path):
        database.create_batch("b2", str(exports), str(tmp_path / "out"), ["en"])
        database.record_job("b2", "home.xliff_en", "home.xliff", "en", STATUS_SUCCESS)

        result = processor.process(str(exports), str(tmp_path / "out"), languages=["en"], batch_id="b2")

        assert (result.success_count, result.skipped_count) == (1, 1)
        assert not (tmp_path / "out" / "en" / "home_en.xliff").exists()
        assert (tmp_path / "out" / "en" / "post_en.xliff").exists()

    def test_new_batch_ignores_other_ledgers(self, processor, database, exports, tmp_path):
        database.create_batch("old", str(exports), str(tmp_path / "out"), ["en"])
        database.record_job("old", "home.xliff_en", "home.xliff", "en", STATUS_SUCCESS)

        result = processor.process(str(exports), str(tmp_path / "out"), languages=["en"])

        assert result.batch_id != "old"
        assert result.success_count == 2
