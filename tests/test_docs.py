import json
import os
import stat

import pytest
from flask import Flask

from oasflask import OpenAPISpec, RouteTemplateError, SpecPublishError, SpecSerializationError
from tests.petstore import build_endpoints


def _spec(app=None):
    return OpenAPISpec('Pet Store', 'desc', '1.0', build_endpoints(), app or Flask(__name__))


def test_spec_json_written_and_served(client, docs_dir):
    spec_file = docs_dir / 'spec.json'
    assert spec_file.exists()
    resp = client.get('/docs/spec.json')
    assert resp.status_code == 200
    assert resp.data == spec_file.read_bytes()
    body = json.loads(resp.data)
    assert body['servers'] == [{'url': 'https://api.example.com', 'description': 'prod'}]
    assert body['components']['schemas']['NewPet']['required'] == ['name']


def test_spec_file_permissions(docs_dir, app_instance):
    mode = stat.S_IMODE(os.stat(docs_dir / 'spec.json').st_mode)
    assert mode == 0o644


def test_docs_index_generated(client):
    resp = client.get('/docs/')
    assert resp.status_code == 200
    assert b'redoc' in resp.data
    assert b'spec.json' in resp.data


def test_existing_index_not_overwritten(tmp_path):
    docs = tmp_path / 'ui'
    docs.mkdir()
    (docs / 'index.html').write_text('<html>swagger ui</html>')
    (docs / 'app.js').write_text('console.log(1)')
    app = Flask(__name__)
    _spec(app).swagger_docs('/swagger', str(docs))
    client = app.test_client()
    assert client.get('/swagger/').data == b'<html>swagger ui</html>'
    assert client.get('/swagger/app.js').status_code == 200
    assert client.get('/swagger/missing.js').status_code == 404


def test_route_resolved_from_endpoint_name(tmp_path):
    app = Flask(__name__)
    app.add_url_rule('/reference', endpoint='reference', view_func=lambda: 'ref')
    _spec(app).swagger_docs('reference', str(tmp_path))
    resp = app.test_client().get('/reference/spec.json')
    assert resp.status_code == 200
    assert resp.data == (tmp_path / 'spec.json').read_bytes()


@pytest.mark.parametrize('route', ['', '/docs/{version}', '/docs/<version>', 'no_such_endpoint'])
def test_unresolvable_route_rejected(tmp_path, route):
    with pytest.raises(RouteTemplateError):
        _spec().swagger_docs(route, str(tmp_path))
    assert not (tmp_path / 'spec.json').exists()


def test_write_failure_raises_publish_error(tmp_path):
    blocker = tmp_path / 'not-a-dir'
    blocker.write_text('x')
    with pytest.raises(SpecPublishError) as exc:
        _spec().swagger_docs('/docs', str(blocker))
    assert exc.value.path.endswith('spec.json')


def test_unserializable_document_raises(tmp_path):
    spec = _spec().schema('Broken', {'default': object()})
    with pytest.raises(SpecSerializationError):
        spec.to_json()
    with pytest.raises(SpecSerializationError):
        spec.swagger_docs('/docs', str(tmp_path))
    assert not (tmp_path / 'spec.json').exists()


def test_spec_written_after_configuration(tmp_path):
    spec = _spec().tag('pets', 'Pets').security('BearerAuth')
    spec.swagger_docs('/docs', str(tmp_path))
    spec.tag('late', 'not in snapshot')
    body = json.loads((tmp_path / 'spec.json').read_text())
    assert [t['name'] for t in body['tags']] == ['pets']
    assert body['security'] == [{'BearerAuth': []}]
