"""Tests for download filenames."""
from fluxstudio.client.files import build_download_filename, sanitize_prompt, save_image


def test_sanitize_prompt_replaces_unsafe_characters():
    assert sanitize_prompt("A cat, on a mat!") == "A_cat__on_a_mat_"
    assert sanitize_prompt("Café 42") == "Caf__42"


def test_sanitize_prompt_truncates_to_fifty_characters():
    assert sanitize_prompt("x" * 80) == "x" * 50


def test_build_download_filename():
    assert build_download_filename("a red fox", timestamp=1700000000000) == (
        "ai_image_a_red_fox_1700000000000.jpg"
    )


def test_build_download_filename_is_unique_per_call():
    first = build_download_filename("fox", timestamp=1)
    second = build_download_filename("fox", timestamp=2)
    assert first != second


def test_save_image_creates_directory(tmp_path):
    path = save_image(b"data", tmp_path / "nested", "image.jpg")
    assert path.read_bytes() == b"data"


def test_save_image_never_overwrites(tmp_path):
    first = save_image(b"one", tmp_path, "image.jpg")
    second = save_image(b"two", tmp_path, "image.jpg")

    assert first.name == "image.jpg"
    assert second.name == "image_1.jpg"
    assert first.read_bytes() == b"one"
