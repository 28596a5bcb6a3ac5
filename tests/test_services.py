"""Tests for source URL storage, scan debouncing and upload validation."""

import io

import pytest
from fastapi import HTTPException, UploadFile

from weinblog.services import ScanDebouncer, SourceUrlStore
from weinblog.services.image_upload import detect_image_type, read_label_image


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class TestScanDebouncer:
    """Tests for ScanDebouncer."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.clock = FakeClock()
        self.debouncer = ScanDebouncer(window_seconds=1.0, clock=self.clock)

    def test_first_scan_processed(self) -> None:
        assert self.debouncer.should_process("WEIN-MOS-001") is True

    def test_repeat_within_window_dropped(self) -> None:
        self.debouncer.should_process("WEIN-MOS-001")
        self.clock.now += 0.5
        assert self.debouncer.should_process("WEIN-MOS-001") is False

    def test_repeat_after_window_processed(self) -> None:
        self.debouncer.should_process("WEIN-MOS-001")
        self.clock.now += 1.0
        assert self.debouncer.should_process("WEIN-MOS-001") is True

    def test_different_code_processed(self) -> None:
        self.debouncer.should_process("WEIN-MOS-001")
        assert self.debouncer.should_process("WEIN-RHG-002") is True
        assert self.debouncer.should_process("WEIN-MOS-001") is True

    def test_scanners_are_independent(self) -> None:
        """A repeat from one scanner does not suppress another scanner."""
        assert self.debouncer.should_process("WEIN-MOS-001", "10.0.0.1") is True
        assert self.debouncer.should_process("WEIN-MOS-001", "10.0.0.2") is True
        assert self.debouncer.should_process("WEIN-MOS-001", "10.0.0.1") is False
        assert self.debouncer.should_process("WEIN-MOS-001", "10.0.0.2") is False

    def test_scanner_state_is_bounded(self) -> None:
        """The oldest scanner is forgotten once the limit is reached."""
        debouncer = ScanDebouncer(window_seconds=1.0, clock=self.clock, max_scanners=2)
        debouncer.should_process("WEIN-MOS-001", "a")
        self.clock.now += 0.1
        debouncer.should_process("WEIN-MOS-001", "b")
        self.clock.now += 0.1
        debouncer.should_process("WEIN-MOS-001", "c")
        # "a" was evicted, so its repeat is treated as a fresh scan
        assert debouncer.should_process("WEIN-MOS-001", "a") is True


class TestSourceUrlStore:
    """Tests for SourceUrlStore."""

    def test_missing_file_is_empty(self, tmp_path) -> None:
        store = SourceUrlStore(tmp_path / "missing.json")
        assert store.all() == {}
        assert store.get("1") is None

    def test_save_and_get(self, tmp_path) -> None:
        path = tmp_path / "nested" / "source_urls.json"
        store = SourceUrlStore(path)
        store.save("12", "https://moevenpick-wein.de/prosecco.html")
        assert path.exists()
        assert SourceUrlStore(path).get("12") == "https://moevenpick-wein.de/prosecco.html"

    def test_save_replaces_previous(self, tmp_path) -> None:
        store = SourceUrlStore(tmp_path / "source_urls.json")
        store.save("12", "https://a.example/prosecco")
        store.save("7", "https://b.example/rioja")
        store.save("12", "https://c.example/prosecco")
        assert store.all() == {
            "12": "https://c.example/prosecco",
            "7": "https://b.example/rioja",
        }

    def test_non_ascii_url(self, tmp_path) -> None:
        store = SourceUrlStore(tmp_path / "source_urls.json")
        store.save("2", "https://shop.example.cn/雷司令")
        assert store.get("2") == "https://shop.example.cn/雷司令"

    def test_save_leaves_no_temp_files(self, tmp_path) -> None:
        store = SourceUrlStore(tmp_path / "source_urls.json")
        store.save("12", "https://a.example/prosecco")
        store.save("7", "https://b.example/rioja")
        assert [p.name for p in tmp_path.iterdir()] == ["source_urls.json"]

    def test_failed_save_keeps_previous_file(self, tmp_path, monkeypatch) -> None:
        """A write that fails midway leaves the stored associations intact."""
        store = SourceUrlStore(tmp_path / "source_urls.json")
        store.save("12", "https://a.example/prosecco")

        def broken_dump(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr("weinblog.services.source_urls.json.dump", broken_dump)
        with pytest.raises(OSError):
            store.save("7", "https://b.example/rioja")

        assert store.all() == {"12": "https://a.example/prosecco"}
        assert [p.name for p in tmp_path.iterdir()] == ["source_urls.json"]

    def test_corrupt_file_is_empty(self, tmp_path) -> None:
        path = tmp_path / "source_urls.json"
        path.write_text("{not json", encoding="utf-8")
        assert SourceUrlStore(path).all() == {}

    def test_wrong_shape_is_empty(self, tmp_path) -> None:
        path = tmp_path / "source_urls.json"
        path.write_text('["https://a.example"]', encoding="utf-8")
        assert SourceUrlStore(path).all() == {}


class TestImageUpload:
    """Tests for label image validation."""

    def test_detect_png(self, sample_image_bytes) -> None:
        assert detect_image_type(sample_image_bytes) == ".png"

    def test_detect_jpeg(self) -> None:
        assert detect_image_type(b"\xff\xd8\xff\xe0" + b"\x00" * 16) == ".jpg"

    def test_riff_without_webp_rejected(self) -> None:
        assert detect_image_type(b"RIFF\x00\x00\x00\x00WAVE") is None

    def test_too_short(self) -> None:
        assert detect_image_type(b"\x89PNG") is None

    @pytest.mark.asyncio
    async def test_read_valid_image(self, sample_image_bytes) -> None:
        upload = UploadFile(file=io.BytesIO(sample_image_bytes), filename="label.png")
        assert await read_label_image(upload) == sample_image_bytes

    @pytest.mark.asyncio
    async def test_read_rejects_text(self) -> None:
        upload = UploadFile(file=io.BytesIO(b"just some text, not an image"), filename="label.png")
        with pytest.raises(HTTPException) as exc_info:
            await read_label_image(upload)
        assert exc_info.value.status_code == 415
