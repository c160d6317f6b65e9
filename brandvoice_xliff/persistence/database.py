"""
SQLite database manager for batch progress persistence.

A batch is a run of batch_translate.py over one folder. Every job
(one file x one language) gets a row keyed by "<filename>_<language>" that is
written as soon as the job ends, so an interrupted batch can be resumed with
its batch id.
"""

import json
import os
import sqlite3
from datetime import datetime
from typing import Any, Dict, List, Optional

from brandvoice_xliff.config import BATCH_DB_PATH
from brandvoice_xliff.utils.unified_logger import UnifiedLogger, get_logger


class Database:
    """
    Manages the SQLite ledger of batch jobs.
    """

    def __init__(self, db_path: str = BATCH_DB_PATH, logger: Optional[UnifiedLogger] = None):
        """
        Initialize database connection.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        self.logger = logger or get_logger()
        self._connection: Optional[sqlite3.Connection] = None

        # Ensure directory exists
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        self._initialize_schema()

    def _get_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            self._connection = sqlite3.connect(self.db_path, timeout=30.0)
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def close(self):
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def _initialize_schema(self):
        """Create database tables if they don't exist."""
        conn = self._get_connection()
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS batches (
                batch_id TEXT PRIMARY KEY,
                input_dir TEXT NOT NULL,
                output_dir TEXT NOT NULL,
                languages JSON NOT NULL,
                status TEXT NOT NULL,
                summary JSON,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS batch_jobs (
                batch_id TEXT NOT NULL,
                job_key TEXT NOT NULL,
                filename TEXT NOT NULL,
                language TEXT NOT NULL,
                status TEXT NOT NULL,
                output_path TEXT,
                error TEXT,
                updated_at TIMESTAMP NOT NULL,
                PRIMARY KEY (batch_id, job_key),
                FOREIGN KEY (batch_id) REFERENCES batches(batch_id)
                    ON DELETE CASCADE
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_batch_jobs_batch
            ON batch_jobs(batch_id)
        """)

        conn.commit()

    def create_batch(self, batch_id: str, input_dir: str, output_dir: str, languages: List[str]) -> bool:
        """
        Create a batch record (a no-op when resuming an existing batch).

        Returns:
            True if a new record was created
        """
        try:
            conn = self._get_connection()
            conn.execute("""
                INSERT INTO batches (batch_id, input_dir, output_dir, languages, status)
                VALUES (?, ?, ?, ?, ?)
            """, (batch_id, input_dir, output_dir, json.dumps(languages), 'running'))
            conn.commit()
            return True
        except sqlite3.IntegrityError:
            # Batch already exists
            return False

    def finish_batch(self, batch_id: str, summary: Dict[str, Any]):
        conn = self._get_connection()
        conn.execute("""
            UPDATE batches SET status = ?, summary = ?, updated_at = CURRENT_TIMESTAMP
            WHERE batch_id = ?
        """, ('completed', json.dumps(summary), batch_id))
        conn.commit()

    def get_batch(self, batch_id: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve batch information.

        Returns:
            Batch data dictionary or None if not found
        """
        row = self._get_connection().execute(
            "SELECT * FROM batches WHERE batch_id = ?", (batch_id,)
        ).fetchone()

        if not row:
            return None

        return {
            'batch_id': row['batch_id'],
            'input_dir': row['input_dir'],
            'output_dir': row['output_dir'],
            'languages': json.loads(row['languages']),
            'status': row['status'],
            'summary': json.loads(row['summary']) if row['summary'] else None,
            'created_at': row['created_at'],
            'updated_at': row['updated_at'],
        }

    def record_job(self, batch_id: str, job_key: str, filename: str, language: str,
                   status: str, output_path: Optional[str] = None, error: Optional[str] = None):
        """Insert or replace a job row; committed immediately"""
        conn = self._get_connection()
        conn.execute("""
            INSERT OR REPLACE INTO batch_jobs
                (batch_id, job_key, filename, language, status, output_path, error, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """, (batch_id, job_key, filename, language, status, output_path, error,
              datetime.now().isoformat(timespec='seconds')))
        conn.commit()

    def get_jobs(self, batch_id: str) -> Dict[str, Dict[str, Any]]:
        """
        All jobs of a batch.

        Returns:
            job_key -> {filename, language, status, output_path, error, timestamp}
        """
        rows = self._get_connection().execute(
            "SELECT * FROM batch_jobs WHERE batch_id = ? ORDER BY job_key", (batch_id,)
        ).fetchall()

        return {
            row['job_key']: {
                'filename': row['filename'],
                'language': row['language'],
                'status': row['status'],
                'output_path': row['output_path'],
                'error': row['error'],
                'timestamp': row['updated_at'],
            }
            for row in rows
        }

    def delete_batch(self, batch_id: str) -> bool:
        conn = self._get_connection()
        conn.execute("DELETE FROM batch_jobs WHERE batch_id = ?", (batch_id,))
        cursor = conn.execute("DELETE FROM batches WHERE batch_id = ?", (batch_id,))
        conn.commit()
        return cursor.rowcount > 0
