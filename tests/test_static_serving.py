"""Tests for static file serving."""

import os
from unittest.mock import MagicMock

import pytest
from werkzeug.exceptions import Forbidden

from pinyin_match.config import Config
from pinyin_match.web.app import create_app, resolve_static_path


@pytest.fixture
def static_root(tmp_path):
    """Static directory with one file of each served type."""
    root = tmp_path / 'static'
    root.mkdir()
    (root / 'index.html').write_text('<h1>Pinyin Match</h1>', encoding='utf-8')
    (root / 'app.css').write_text('body {}', encoding='utf-8')
    (root / 'app.js').write_text('console.log(1);', encoding='utf-8')
    (root / 'favicon.ico').write_bytes(b'\x00\x00\x01\x00')
    (root / 'words.dat').write_bytes(b'\x01\x02')
    (root / 'sub').mkdir()
    (root / 'sub' / 'page.html').write_text('<p>sub</p>', encoding='utf-8')
    (tmp_path / 'secret.txt').write_text('secret', encoding='utf-8')
    return root


@pytest.fixture
def client(static_root):
    service = MagicMock()
    service.enabled = False
    app = create_app({'TESTING': True, 'STATIC_ROOT': static_root, 'TTS_SERVICE': service})
    return app.test_client()


class TestStaticFiles:
    """Test GET requests for static assets."""

    def test_root_serves_index(self, client):
        response = client.get('/')
        assert response.status_code == 200
        assert response.mimetype == 'text/html'
        assert b'Pinyin Match' in response.data

    @pytest.mark.parametrize("path, mimetype", [
        ('/index.html', 'text/html'),
        ('/app.css', 'text/css'),
        ('/app.js', 'application/javascript'),
        ('/favicon.ico', 'image/x-icon'),
        ('/words.dat', 'application/octet-stream'),
        ('/sub/page.html', 'text/html'),
    ])
    def test_content_types(self, client, path, mimetype):
        response = client.get(path)
        assert response.status_code == 200
        assert response.mimetype == mimetype

    def test_query_string_ignored(self, client):
        assert client.get('/app.css?v=2').status_code == 200

    def test_encoded_question_mark_in_filename(self, client, static_root):
        (static_root / 'why?.txt').write_text('because', encoding='utf-8')
        response = client.get('/why%3F.txt')
        assert response.status_code == 200
        assert response.data == b'because'

    def test_missing_file(self, client):
        assert client.get('/missing.html').status_code == 404

    def test_directory_is_not_served(self, client):
        assert client.get('/sub/').status_code == 404

    def test_symlink_out_of_root_forbidden(self, client, static_root):
        os.symlink(static_root.parent / 'secret.txt', static_root / 'leak.txt')
        assert client.get('/leak.txt').status_code == 403

    @pytest.mark.parametrize("method", ['post', 'put', 'delete', 'patch'])
    def test_other_methods_not_allowed(self, client, method):
        assert getattr(client, method)('/').status_code == 405
        assert getattr(client, method)('/app.css').status_code == 405

    def test_options_not_allowed(self, client):
        assert client.options('/app.css').status_code == 405


class TestResolveStaticPath:
    """Test path resolution against the static root."""

    def test_empty_path_is_index(self, static_root):
        root = static_root.resolve()
        assert resolve_static_path(root, '') == root / Config.INDEX_DOCUMENT

    def test_question_mark_kept_in_filename(self, static_root):
        root = static_root.resolve()
        assert resolve_static_path(root, 'why?.txt') == root / 'why?.txt'

    def test_nested_path(self, static_root):
        root = static_root.resolve()
        assert resolve_static_path(root, 'sub/page.html') == root / 'sub' / 'page.html'

    def test_dot_segments_inside_root(self, static_root):
        root = static_root.resolve()
        assert resolve_static_path(root, 'sub/../app.css') == root / 'app.css'

    @pytest.mark.parametrize("path", ['../secret.txt', 'sub/../../secret.txt', '..'])
    def test_escaping_paths_forbidden(self, static_root, path):
        with pytest.raises(Forbidden):
            resolve_static_path(static_root.resolve(), path)
