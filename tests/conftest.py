import os, sys, pytest
# Ensure project root is on path so 'oasflask' and 'scripts' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from oasflask import create_app
from tests.petstore import build_endpoints, NEW_PET_SCHEMA

JWT_SECRET = 'test-secret-key-long-enough-for-hs256-signing'


@pytest.fixture()
def docs_dir(tmp_path):
    return tmp_path / 'docs'


@pytest.fixture()
def app_instance(docs_dir):
    def configure(spec):
        spec.tag('pets', 'Everything about pets').schema('NewPet', NEW_PET_SCHEMA)

    app = create_app(build_endpoints(), config={
        'OAS_API_TITLE': 'Pet Store',
        'OAS_API_DESCRIPTION': 'desc',
        'OAS_API_VERSION': '1.0',
        'OAS_DOCS_DIR': str(docs_dir),
        'OAS_SERVERS': [('https://api.example.com', 'prod')],
        'JWT_SECRET_KEY': JWT_SECRET,
    }, configure_spec=configure)
    yield app


@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()
