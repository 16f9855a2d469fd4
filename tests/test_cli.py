"""Tests for the CLI module."""

from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from pdfchat.client.cli import ask, count, delete_db, ingest, init_index, search
from pdfchat.errors import ConfigurationError, GenerationServiceError, LoadError
from pdfchat.service.models import Answer, IngestionJob, IngestionResult, JobState

SEARCH_RESULT = {
    "id": "paper.pdf_chunk_0",
    "source": "paper.pdf",
    "content": "Neutron scattering reveals structure.",
    "chunk_index": 0,
    "score": 0.87,
    "metadata": {"page_number": 1},
}


def done(chunks: int) -> IngestionResult:
    job = IngestionJob(filename="x.pdf", destination="d", path="d/x.pdf")
    return IngestionResult(job=job, state=JobState.DONE, chunk_count=chunks)


class TestIngestCLI:
    """Tests for the ingest CLI command."""

    def setup_method(self):
        self.runner = CliRunner()

    @patch("pdfchat.client.cli.build_ingestion_coordinator")
    @patch("pdfchat.client.cli_helpers.database_exists", return_value=True)
    def test_ingest_directory(self, mock_db_exists, mock_build, tmp_path):
        (tmp_path / "a.pdf").write_bytes(b"%PDF-1.4")
        (tmp_path / "b.pdf").write_bytes(b"%PDF-1.4")
        (tmp_path / "notes.txt").write_text("ignored")
        mock_build.return_value.run.return_value = done(3)

        result = self.runner.invoke(ingest, [str(tmp_path)])

        assert result.exit_code == 0
        assert "Found 2 PDF file(s)" in result.output
        assert "Stored 6 chunks" in result.output
        jobs = [call.args[0] for call in mock_build.return_value.run.call_args_list]
        assert [job.filename for job in jobs] == ["a.pdf", "b.pdf"]
        assert jobs[0].path == str(tmp_path / "a.pdf")

    @patch("pdfchat.client.cli.build_ingestion_coordinator")
    @patch("pdfchat.client.cli_helpers.database_exists", return_value=True)
    def test_ingest_reports_failed_files(self, mock_db_exists, mock_build, tmp_path):
        (tmp_path / "bad.pdf").write_text("dummy")
        mock_build.return_value.run.side_effect = LoadError("Cannot parse bad.pdf as PDF")

        result = self.runner.invoke(ingest, [str(tmp_path)])

        assert result.exit_code != 0
        assert "Error processing bad.pdf" in result.output

    @patch("pdfchat.client.cli.build_ingestion_coordinator")
    @patch("pdfchat.client.cli_helpers.database_exists", return_value=True)
    def test_ingest_dimension_mismatch_aborts(self, mock_db_exists, mock_build, tmp_path):
        (tmp_path / "a.pdf").write_bytes(b"%PDF-1.4")
        mock_build.side_effect = ConfigurationError("Vector index expects 384-dimensional vectors")

        result = self.runner.invoke(ingest, [str(tmp_path)])

        assert result.exit_code != 0
        assert "384-dimensional" in result.output

    @patch("pdfchat.workers.queue.JobQueue")
    def test_ingest_enqueue(self, mock_queue_class, tmp_path):
        (tmp_path / "a.pdf").write_bytes(b"%PDF-1.4")
        mock_queue_class.return_value.enqueue.return_value = "task-1"

        result = self.runner.invoke(ingest, [str(tmp_path), "--enqueue"])

        assert result.exit_code == 0
        assert "Enqueued a.pdf (job task-1)" in result.output
        job = mock_queue_class.return_value.enqueue.call_args.args[0]
        assert job.destination == str(tmp_path)

    def test_ingest_empty_directory(self, tmp_path):
        result = self.runner.invoke(ingest, [str(tmp_path)])

        assert result.exit_code == 0
        assert "No PDF files found" in result.output

    def test_ingest_nonexistent_directory(self):
        result = self.runner.invoke(ingest, ["/nonexistent/path"])

        assert result.exit_code != 0
        assert "does not exist" in result.output.lower()

    @patch("pdfchat.client.cli_helpers.database_exists", return_value=False)
    def test_ingest_requires_database(self, mock_db_exists, tmp_path):
        (tmp_path / "a.pdf").write_bytes(b"%PDF-1.4")

        result = self.runner.invoke(ingest, [str(tmp_path)])

        assert result.exit_code != 0
        assert "Database does not exist" in result.output


class TestSearchAndAskCLI:
    """Tests for the search and ask commands."""

    def setup_method(self):
        self.runner = CliRunner()

    @patch("pdfchat.client.cli.build_answer_coordinator")
    @patch("pdfchat.client.cli_helpers.database_exists", return_value=True)
    def test_search_prints_ranked_results(self, mock_db_exists, mock_build):
        mock_build.return_value.search.return_value = [SEARCH_RESULT]

        result = self.runner.invoke(search, ["neutrons", "--top-k", "3"])

        assert result.exit_code == 0
        assert "1. [paper.pdf - chunk #0, page 1] (score: 0.8700)" in result.output
        mock_build.return_value.search.assert_called_once_with("neutrons", top_k=3)

    @patch("pdfchat.client.cli.build_answer_coordinator")
    @patch("pdfchat.client.cli_helpers.database_exists", return_value=True)
    def test_search_no_results(self, mock_db_exists, mock_build):
        mock_build.return_value.search.return_value = []

        result = self.runner.invoke(search, ["nothing"])

        assert result.exit_code == 0
        assert "No results found." in result.output

    @patch("pdfchat.client.cli.build_answer_coordinator")
    @patch("pdfchat.client.cli_helpers.database_exists", return_value=True)
    def test_ask_prints_answer_and_sources(self, mock_db_exists, mock_build):
        mock_build.return_value.answer.return_value = Answer(message="It scatters.", docs=[SEARCH_RESULT])

        result = self.runner.invoke(ask, ["What happens?"])

        assert result.exit_code == 0
        assert "It scatters." in result.output
        assert "Sources:" in result.output
        assert "paper.pdf" in result.output

    @patch("pdfchat.client.cli.build_answer_coordinator")
    @patch("pdfchat.client.cli_helpers.database_exists", return_value=True)
    def test_ask_generation_failure(self, mock_db_exists, mock_build):
        mock_build.return_value.answer.side_effect = GenerationServiceError(
            "Hugging Face API failed", details="rate limited", status_code=429
        )

        result = self.runner.invoke(ask, ["What happens?"])

        assert result.exit_code != 0
        assert "rate limited" in result.output


class TestIndexAdminCLI:
    """Tests for count, init-index and delete-db."""

    def setup_method(self):
        self.runner = CliRunner()

    @patch("pdfchat.client.cli.build_vector_index")
    @patch("pdfchat.client.cli_helpers.database_exists", return_value=True)
    def test_count(self, mock_db_exists, mock_build_index):
        mock_build_index.return_value.count.return_value = 7

        result = self.runner.invoke(count, [])

        assert result.exit_code == 0
        assert "contains 7 chunk(s)" in result.output
        mock_build_index.return_value.close.assert_called_once()

    @patch("pdfchat.client.cli.build_vector_index")
    @patch("pdfchat.client.cli_helpers.database_exists", return_value=True)
    def test_count_error(self, mock_db_exists, mock_build_index):
        mock_build_index.return_value.count.side_effect = RuntimeError("query failed")

        result = self.runner.invoke(count, [])

        assert result.exit_code != 0
        assert "Error counting documents" in result.output

    @patch("pdfchat.client.cli.verify_embedding_setup")
    @patch("pdfchat.client.cli.build_vector_index")
    @patch("pdfchat.client.cli.build_embedding_client")
    @patch("pdfchat.client.cli_helpers.create_database")
    @patch("pdfchat.client.cli_helpers.database_exists", return_value=False)
    def test_init_index_creates_database(
        self, mock_db_exists, mock_create_db, mock_build_client, mock_build_index, mock_verify
    ):
        mock_build_client.return_value = MagicMock(model="all-mpnet-base-v2", dimensions=768)

        result = self.runner.invoke(init_index, ["--create-database"])

        assert result.exit_code == 0
        mock_create_db.assert_called_once()
        mock_verify.assert_called_once_with(mock_build_client.return_value, mock_build_index.return_value)
        assert "768-dimensional" in result.output

    @patch("pdfchat.client.cli.verify_embedding_setup")
    @patch("pdfchat.client.cli.build_vector_index")
    @patch("pdfchat.client.cli.build_embedding_client")
    @patch("pdfchat.client.cli_helpers.database_exists", return_value=True)
    def test_init_index_dimension_mismatch(self, mock_db_exists, mock_build_client, mock_build_index, mock_verify):
        mock_verify.side_effect = ConfigurationError("produces 384-dimensional vectors")

        result = self.runner.invoke(init_index, [])

        assert result.exit_code != 0
        assert "384-dimensional" in result.output
        mock_build_index.return_value.close.assert_called_once()

    @patch("pdfchat.client.cli.delete_database")
    @patch("pdfchat.client.cli.database_exists", return_value=True)
    def test_delete_db_with_yes(self, mock_db_exists, mock_delete):
        result = self.runner.invoke(delete_db, ["--yes"])

        assert result.exit_code == 0
        mock_delete.assert_called_once()
        assert "successfully deleted" in result.output

    @patch("pdfchat.client.cli.delete_database")
    @patch("pdfchat.client.cli.database_exists", return_value=True)
    def test_delete_db_cancelled(self, mock_db_exists, mock_delete):
        result = self.runner.invoke(delete_db, [], input="n\n")

        assert result.exit_code == 0
        assert "Deletion cancelled." in result.output
        mock_delete.assert_not_called()

    @patch("pdfchat.client.cli.delete_database")
    @patch("pdfchat.client.cli.database_exists", return_value=False)
    def test_delete_db_missing_database(self, mock_db_exists, mock_delete):
        result = self.runner.invoke(delete_db, ["--yes"])

        assert result.exit_code == 0
        assert "does not exist" in result.output
        mock_delete.assert_not_called()
