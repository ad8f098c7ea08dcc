import requests
from bs4 import BeautifulSoup

from site_dump.images import (
    build_image_ref,
    download_image,
    extract_image_candidates,
    image_extension,
    image_id,
)
from site_dump.models import ImageCandidate


def test_identifiers_wrap_after_26():
    assert image_id(0) == "A"
    assert image_id(25) == "Z"
    assert image_id(26) == "A"
    assert image_id(27) == "B"


def test_extension_comes_from_url_path():
    assert image_extension("https://example.com/img/logo.png") == ".png"
    assert image_extension("https://example.com/img/photo.webp?size=large") == ".webp"
    assert image_extension("https://example.com/img/raw") == ".jpg"


def test_candidates_resolve_and_skip_data_urls():
    soup = BeautifulSoup(
        """
        <img src="/a.png" alt="Logo">
        <img src="data:image/png;base64,AAAA" alt="inline">
        <img alt="no source">
        <img src="http://[::1/x.png">
        <img src="b.gif">
        """,
        "html.parser",
    )
    candidates = extract_image_candidates(soup, "https://example.com/page/")
    assert [c.absolute_url for c in candidates] == [
        "https://example.com/a.png",
        "https://example.com/page/b.gif",
    ]
    assert candidates[0].alt_text == "Logo"
    assert candidates[1].alt_text == "No description"


def test_build_image_ref_names_file_from_id_and_extension():
    ref = build_image_ref(ImageCandidate("x.png", "https://example.com/x.png", "X"), 28)
    assert ref.id == "C"
    assert ref.local_filename == "image_C.png"


def test_download_image_writes_file(tmp_path, session, fetcher):
    session.add_image("https://example.com/x.png", b"png-bytes")
    ref = build_image_ref(ImageCandidate("x.png", "https://example.com/x.png", "X"), 0)
    assert download_image(fetcher, ref, tmp_path)
    assert (tmp_path / "image_A.png").read_bytes() == b"png-bytes"


def test_download_failures_are_reported_not_raised(tmp_path, session, fetcher):
    session.add_error("https://example.com/down.png", requests.ConnectionError("boom"))
    missing = build_image_ref(ImageCandidate("m.png", "https://example.com/missing.png", ""), 0)
    down = build_image_ref(ImageCandidate("d.png", "https://example.com/down.png", ""), 1)
    assert not download_image(fetcher, missing, tmp_path)
    assert not download_image(fetcher, down, tmp_path)
    assert list(tmp_path.iterdir()) == []
