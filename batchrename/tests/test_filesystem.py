"""Tests for the local filesystem file source and rename executor."""

from pathlib import Path

import pytest

from batchrename.filesystem import LocalFileSource, LocalRenameExecutor, guess_mime_type, source_file_from_path
from batchrename.models.files import SelectionCriteria


@pytest.fixture
def media_dir(tmp_path: Path) -> Path:
    """Directory with a mix of media, documents and hidden files."""
    (tmp_path / "IMG_10.jpg").write_bytes(b"x" * 300)
    (tmp_path / "IMG_2.jpg").write_bytes(b"x" * 100)
    (tmp_path / "clip.mp4").write_bytes(b"x" * 200)
    (tmp_path / "song.mp3").write_bytes(b"x" * 50)
    (tmp_path / "notes.txt").write_text("notes")
    (tmp_path / ".hidden.jpg").write_bytes(b"x")
    (tmp_path / "subdir").mkdir()
    return tmp_path


class TestSourceFileFromPath:
    """Tests for building SourceFile instances from disk."""

    def test_fields(self, tmp_path: Path) -> None:
        """Test that name, size, MIME type and id are read from the file."""
        path = tmp_path / "photo.png"
        path.write_bytes(b"12345")

        file = source_file_from_path(path)

        assert file.name == "photo.png"
        assert file.size_bytes == 5
        assert file.mime_type == "image/png"
        assert file.id == str(path.absolute())
        assert file.last_modified.tzinfo is not None

    def test_unknown_mime_type(self) -> None:
        """Test the fallback MIME type."""
        assert guess_mime_type(Path("data.unknownext")) == "application/octet-stream"


class TestLocalFileSource:
    """Tests for LocalFileSource."""

    def test_default_selection(self, media_dir: Path) -> None:
        """Test that images and videos are selected, sorted by name."""
        files = LocalFileSource().list_files(SelectionCriteria(directory=str(media_dir)))

        assert [f.name for f in files] == ["IMG_10.jpg", "IMG_2.jpg", "clip.mp4"]

    def test_include_audio_and_extensions(self, media_dir: Path) -> None:
        """Test enabling audio and an extension allow-list."""
        criteria = SelectionCriteria(
            directory=str(media_dir), include_images=False, include_videos=False, include_audio=True, extensions=["txt"]
        )

        files = LocalFileSource().list_files(criteria)

        assert [f.name for f in files] == ["notes.txt", "song.mp3"]

    def test_hidden_files(self, media_dir: Path) -> None:
        """Test that dot-files are only listed on request."""
        criteria = SelectionCriteria(directory=str(media_dir), include_hidden=True)

        files = LocalFileSource().list_files(criteria)

        assert ".hidden.jpg" in [f.name for f in files]

    def test_size_filter(self, media_dir: Path) -> None:
        """Test that size bounds are applied."""
        criteria = SelectionCriteria(directory=str(media_dir), min_size=150)

        files = LocalFileSource().list_files(criteria)

        assert [f.name for f in files] == ["IMG_10.jpg", "clip.mp4"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Test error for a directory that does not exist."""
        with pytest.raises(FileNotFoundError):
            LocalFileSource().list_files(SelectionCriteria(directory=str(tmp_path / "missing")))

    def test_not_a_directory(self, tmp_path: Path) -> None:
        """Test error when the path is a file."""
        path = tmp_path / "file.jpg"
        path.write_bytes(b"x")

        with pytest.raises(NotADirectoryError):
            LocalFileSource().list_files(SelectionCriteria(directory=str(path)))


class TestLocalRenameExecutor:
    """Tests for LocalRenameExecutor."""

    @pytest.fixture
    def executor(self) -> LocalRenameExecutor:
        return LocalRenameExecutor()

    def test_rename_success(self, tmp_path: Path, executor: LocalRenameExecutor) -> None:
        """Test renaming a file in place."""
        path = tmp_path / "a.jpg"
        path.write_bytes(b"data")
        file = source_file_from_path(path)

        result = executor.rename(file, "photo001.jpg")

        assert result.success
        assert result.new_identity == str((tmp_path / "photo001.jpg").absolute())
        assert not path.exists()
        assert (tmp_path / "photo001.jpg").read_bytes() == b"data"

    def test_has_conflict(self, tmp_path: Path, executor: LocalRenameExecutor) -> None:
        """Test conflict detection against another existing file."""
        path = tmp_path / "a.jpg"
        path.write_bytes(b"a")
        (tmp_path / "b.jpg").write_bytes(b"b")
        file = source_file_from_path(path)

        assert executor.has_conflict(file, "b.jpg")
        assert not executor.has_conflict(file, "c.jpg")
        assert not executor.has_conflict(file, "a.jpg")

    def test_rename_refuses_to_overwrite(self, tmp_path: Path, executor: LocalRenameExecutor) -> None:
        """Test that an existing target is never replaced."""
        path = tmp_path / "a.jpg"
        path.write_bytes(b"a")
        (tmp_path / "b.jpg").write_bytes(b"b")
        file = source_file_from_path(path)

        result = executor.rename(file, "b.jpg")

        assert not result.success
        assert "already exists" in result.error
        assert (tmp_path / "b.jpg").read_bytes() == b"b"
        assert path.exists()

    def test_rename_missing_source(self, tmp_path: Path, executor: LocalRenameExecutor) -> None:
        """Test failure when the source disappeared after planning."""
        path = tmp_path / "a.jpg"
        path.write_bytes(b"a")
        file = source_file_from_path(path)
        path.unlink()

        result = executor.rename(file, "b.jpg")

        assert not result.success
        assert "Source file not found" in result.error

    def test_rename_os_error(self, tmp_path: Path, executor: LocalRenameExecutor, monkeypatch) -> None:
        """Test that OS errors are reported as a failed result."""
        path = tmp_path / "a.jpg"
        path.write_bytes(b"a")
        file = source_file_from_path(path)

        def fail_rename(self, target):
            raise PermissionError("read-only")

        monkeypatch.setattr(Path, "rename", fail_rename)

        result = executor.rename(file, "b.jpg")

        assert not result.success
        assert "Permission denied" in result.error
