"""
Tests relocalisation d'images — blob storage mocké (requests patché).
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import patch, MagicMock
import pytest
import requests

from portfolio import blob

NOTION_URL = "https://prod-files-secure.s3.us-west-2.amazonaws.com/ws/abc/photo.png?X-Amz-Signature=1"
BLOB_URL   = "https://abc.public.blob.vercel-storage.com/photo.png"


# ── Helpers ───────────────────────────────────────────────────────────────

def image_response(status=200, content_type="image/png"):
    r = MagicMock()
    r.status_code = status
    r.content = b"\x89PNG"
    r.headers = {"content-type": content_type}
    return r


def blob_response(status=200, url=BLOB_URL):
    r = MagicMock()
    r.status_code = status
    r.json.return_value = {"url": url}
    r.text = "err"
    return r


@pytest.fixture(autouse=True)
def env(monkeypatch):
    monkeypatch.setenv("BLOB_READ_WRITE_TOKEN", "tok-test")
    monkeypatch.delenv("BLOB_API_URL", raising=False)
    blob.clear_cache()
    yield
    blob.clear_cache()


# ── Prédicats ─────────────────────────────────────────────────────────────

class TestPredicates:
    def test_is_blob_url(self):
        assert blob.is_blob_url(BLOB_URL)
        assert not blob.is_blob_url(NOTION_URL)

    @pytest.mark.parametrize("url,expected", [
        (NOTION_URL, True),
        ("https://www.notion.so/image/abc", True),
        (BLOB_URL, False),
        ("data:image/png;base64,AAAA", False),
        ("https://example.com/a.png", False),
        ("", False),
    ])
    def test_needs_relocation(self, url, expected):
        assert blob.needs_relocation(url) is expected

    @pytest.mark.parametrize("ct,ext", [
        ("image/png", "png"),
        ("image/svg+xml", "svg"),
        ("image/webp; charset=binary", "webp"),
        ("application/octet-stream", "jpg"),
    ])
    def test_extension(self, ct, ext):
        assert blob.get_file_extension(ct) == ext

    def test_stable_filename_ignore_la_signature(self):
        other = NOTION_URL.replace("Signature=1", "Signature=2")
        assert blob.stable_filename(NOTION_URL) == blob.stable_filename(other)


# ── Upload ────────────────────────────────────────────────────────────────

class TestUpload:
    def test_succes(self):
        with patch("portfolio.blob.http.get", return_value=image_response()), \
             patch("portfolio.blob.http.put", return_value=blob_response()) as put:
            url = blob.upload_image_to_blob(NOTION_URL, "photo")
        assert url == BLOB_URL
        assert put.call_args[0][0] == "https://blob.vercel-storage.com/photo.png"
        headers = put.call_args[1]["headers"]
        assert headers["authorization"] == "Bearer tok-test"
        assert headers["x-content-type"] == "image/png"

    def test_nom_par_defaut(self):
        with patch("portfolio.blob.http.get", return_value=image_response(content_type="image/gif")), \
             patch("portfolio.blob.http.put", return_value=blob_response()) as put:
            blob.upload_image_to_blob(NOTION_URL)
        target = put.call_args[0][0]
        assert target.startswith("https://blob.vercel-storage.com/image-")
        assert target.endswith(".gif")

    def test_source_inaccessible(self):
        with patch("portfolio.blob.http.get", return_value=image_response(status=404)), \
             patch("portfolio.blob.http.put") as put:
            assert blob.upload_image_to_blob(NOTION_URL) is None
        put.assert_not_called()

    def test_erreur_reseau(self):
        with patch("portfolio.blob.http.get", side_effect=requests.ConnectionError("down")):
            assert blob.upload_image_to_blob(NOTION_URL) is None

    def test_token_absent(self, monkeypatch):
        monkeypatch.delenv("BLOB_READ_WRITE_TOKEN")
        with patch("portfolio.blob.http.get", return_value=image_response()) as get, \
             patch("portfolio.blob.http.put") as put:
            assert blob.upload_image_to_blob(NOTION_URL) is None
        get.assert_not_called()
        put.assert_not_called()

    def test_token_absent_resolve_sans_telechargement(self, monkeypatch):
        """Sans token, le rendu garde l'URL d'origine sans télécharger l'image."""
        monkeypatch.delenv("BLOB_READ_WRITE_TOKEN")
        with patch("portfolio.blob.http.get") as get:
            assert blob.resolve_image_url(NOTION_URL) == NOTION_URL
            assert blob.resolve_image_url(NOTION_URL) == NOTION_URL
        get.assert_not_called()

    def test_relocate_token_absent_upload_error(self, monkeypatch):
        monkeypatch.delenv("BLOB_READ_WRITE_TOKEN")
        with patch("portfolio.blob.http.get") as get:
            with pytest.raises(blob.BlobUploadError):
                blob.relocate(NOTION_URL)
        get.assert_not_called()

    def test_blob_refuse(self):
        with patch("portfolio.blob.http.get", return_value=image_response()), \
             patch("portfolio.blob.http.put", return_value=blob_response(status=403)):
            assert blob.upload_image_to_blob(NOTION_URL) is None

    def test_relocate_leve_erreurs_typees(self):
        with patch("portfolio.blob.http.get", return_value=image_response(status=500)):
            with pytest.raises(blob.ImageFetchError):
                blob.relocate(NOTION_URL)


# ── process / resolve ─────────────────────────────────────────────────────

class TestProcess:
    def test_blob_url_inchangee(self):
        with patch("portfolio.blob.http.get") as get:
            assert blob.process_image_url(BLOB_URL) == BLOB_URL
        get.assert_not_called()

    def test_repli_url_origine(self):
        with patch("portfolio.blob.http.get", side_effect=requests.Timeout("slow")):
            assert blob.process_image_url(NOTION_URL) == NOTION_URL

    def test_resolve_hors_notion_inchangee(self):
        with patch("portfolio.blob.http.get") as get:
            assert blob.resolve_image_url("https://example.com/a.png") == "https://example.com/a.png"
        get.assert_not_called()

    def test_resolve_memorise(self):
        with patch("portfolio.blob.http.get", return_value=image_response()), \
             patch("portfolio.blob.http.put", return_value=blob_response()) as put:
            assert blob.resolve_image_url(NOTION_URL) == BLOB_URL
            assert blob.resolve_image_url(NOTION_URL) == BLOB_URL
        assert put.call_count == 1

    def test_resolve_echec_non_memorise(self):
        with patch("portfolio.blob.http.get", side_effect=requests.ConnectionError("down")) as get:
            assert blob.resolve_image_url(NOTION_URL) == NOTION_URL
            assert blob.resolve_image_url(NOTION_URL) == NOTION_URL
        assert get.call_count == 2
