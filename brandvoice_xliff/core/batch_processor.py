"""
Batch processing of XLIFF folders.

Every discovered file is translated into every requested language (or into
its own target-language when none are given). Each file x language job is
recorded in the SQLite ledger as soon as it ends, so an interrupted batch can
be resumed with its batch id: recorded jobs are not run again.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from brandvoice_xliff.config import OUTPUT_FILENAME_PATTERN, SKIP_EXISTING_FILES
from brandvoice_xliff.core.pipeline import XliffTranslationPipeline
from brandvoice_xliff.core.translation_metrics import TranslationMetrics
from brandvoice_xliff.core.xliff.document import XliffDocument
from brandvoice_xliff.persistence.database import Database
from brandvoice_xliff.utils.file_utils import batch_output_path, discover_xliff_files
from brandvoice_xliff.utils.unified_logger import LogType, UnifiedLogger, get_logger

# Job statuses stored in the ledger
STATUS_SUCCESS = 'success'
STATUS_FAILED = 'failed'
STATUS_ERROR = 'error'
STATUS_SKIPPED = 'skipped'


def new_batch_id() -> str:
    return datetime.now().strftime('%Y-%m-%d_%H-%M-%S')


def job_key(filename: str, language: str) -> str:
    return f"{filename}_{language}"


@dataclass
class BatchResult:
    """Summary of one batch run"""
    batch_id: str
    total_jobs: int = 0
    success_count: int = 0
    failed_count: int = 0
    skipped_count: int = 0
    failed_jobs: List[str] = field(default_factory=list)
    total_time: float = 0.0
    metrics: TranslationMetrics = field(default_factory=TranslationMetrics)

    @property
    def success_rate(self) -> float:
        """Successful share of the jobs that actually ran (skips excluded)"""
        processed = self.success_count + self.failed_count
        return self.success_count / processed if processed else 0.0

    def to_dict(self) -> Dict:
        return {
            'batch_id': self.batch_id,
            'total_jobs': self.total_jobs,
            'success_count': self.success_count,
            'failed_count': self.failed_count,
            'skipped_count': self.skipped_count,
            'failed_jobs': list(self.failed_jobs),
            'success_rate': self.success_rate,
            'total_time': self.total_time,
            'units': self.metrics.to_dict(),
        }

    def log_summary(self, logger: UnifiedLogger):
        logger.info("=== BATCH PROCESSING COMPLETED ===", LogType.SUMMARY, data=self.to_dict())
        logger.info(f"Batch {self.batch_id}: success {self.success_count} | failed {self.failed_count} | "
                    f"skipped {self.skipped_count} | success rate {self.success_rate:.1%} | "
                    f"{self.total_time:.1f}s")
        for failed in self.failed_jobs:
            logger.warning(f"  failed: {failed}")


class BatchProcessor:
    """
    Translate every XLIFF file of a folder into one or more languages.

    Usage:
        processor = BatchProcessor(pipeline, Database())
        result = processor.process("exports/", "translated/", languages=["en", "de"])
    """

    def __init__(self,
                 pipeline: XliffTranslationPipeline,
                 database: Database,
                 output_pattern: str = OUTPUT_FILENAME_PATTERN,
                 skip_existing: bool = SKIP_EXISTING_FILES,
                 clock: Callable[[], float] = time.time,
                 logger: Optional[UnifiedLogger] = None):
        self.pipeline = pipeline
        self.database = database
        self.output_pattern = output_pattern
        self.skip_existing = skip_existing
        self._clock = clock
        self.logger = logger or get_logger()

    def discover(self, input_dir: str) -> List[str]:
        files = discover_xliff_files(input_dir)
        self.logger.info(f"Discovered {len(files)} XLIFF files in {input_dir}")
        return files

    def plan_jobs(self, files: List[str], languages: Optional[List[str]] = None) -> List[Tuple[str, str]]:
        """
        Build the (file, language) job list, file by file.

        Without languages each file is translated into its own target-language;
        files that cannot be read are still planned so the job reports the error.
        """
        jobs = []
        for file_path in files:
            if languages:
                jobs.extend((file_path, language) for language in languages)
                continue
            try:
                _, target = XliffDocument.read_languages(file_path)
            except Exception as e:
                self.logger.warning(f"Could not read languages of {Path(file_path).name}: {e}")
                target = "auto"
            jobs.append((file_path, target))
        return jobs

    def process(self, input_dir: str, output_dir: str,
                languages: Optional[List[str]] = None,
                batch_id: Optional[str] = None) -> BatchResult:
        """
        Run (or resume) a batch.

        Args:
            input_dir: Folder to scan (one subdirectory level deep)
            output_dir: Root of the <language>/ output folders
            languages: Target languages, None for each file's own target-language
            batch_id: Id of a batch to resume; a new id is generated when None

        Returns:
            BatchResult
        """
        resuming = batch_id is not None
        batch_id = batch_id or new_batch_id()
        files = self.discover(input_dir)
        jobs = self.plan_jobs(files, languages)

        self.database.create_batch(batch_id, str(input_dir), str(output_dir), languages or ['auto'])
        completed = self.database.get_jobs(batch_id) if resuming else {}

        result = BatchResult(batch_id=batch_id, total_jobs=len(jobs))
        start = self._clock()

        self.logger.info("=== BATCH PROCESSING STARTED ===")
        self.logger.info(f"Batch ID: {batch_id} | Files: {len(files)} | "
                         f"Languages: {', '.join(languages) if languages else 'auto'}")

        for index, (file_path, language) in enumerate(jobs, start=1):
            filename = Path(file_path).name
            key = job_key(filename, language)
            self.logger.info(f"[{index}/{len(jobs)}] {filename} -> {language}", LogType.BATCH_PROGRESS,
                             data={'current': index, 'total': len(jobs), 'file': filename, 'language': language})

            if key in completed:
                result.skipped_count += 1
                self.logger.info(f"Skipped {key}: already recorded as {completed[key]['status']}")
                continue

            output_path = batch_output_path(output_dir, file_path, language, self.output_pattern)
            if self.skip_existing and Path(output_path).exists():
                result.skipped_count += 1
                self.database.record_job(batch_id, key, filename, language, STATUS_SKIPPED, output_path)
                self.logger.info(f"Skipped {key}: {output_path} already exists")
                continue

            self._run_job(batch_id, key, file_path, language, output_path, result)

        result.total_time = self._clock() - start
        self.database.finish_batch(batch_id, result.to_dict())
        result.log_summary(self.logger)
        return result

    def _run_job(self, batch_id: str, key: str, file_path: str, language: str,
                 output_path: str, result: BatchResult):
        filename = Path(file_path).name
        target = None if language == "auto" else language
        try:
            outcome = self.pipeline.translate_file(file_path, output_path, target_language=target)
        except Exception as e:
            result.failed_count += 1
            result.failed_jobs.append(f"{key} - {e}")
            self.database.record_job(batch_id, key, filename, language, STATUS_ERROR, error=str(e))
            self.logger.error(f"Job failed: {key} - {e}", LogType.ERROR_DETAIL,
                              data={'file': file_path, 'language': language, 'error': str(e)})
            return

        result.metrics.merge(outcome.metrics)
        if outcome.success:
            result.success_count += 1
            self.database.record_job(batch_id, key, filename, language, STATUS_SUCCESS, outcome.output_path)
        else:
            result.failed_count += 1
            result.failed_jobs.append(key)
            self.database.record_job(batch_id, key, filename, language, STATUS_FAILED, output_path,
                                     error=outcome.error)
