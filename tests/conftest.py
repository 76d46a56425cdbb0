import pytest

from zenodo_publish import ConfigService, FileService, ZenodoAPI


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """
    Make sure tokens of the machine running the tests never leak in
    """
    for name in ("ZENODO_TOKEN_SANDBOX", "ZENODO_TOKEN_PRODUCTION", "ZENODO_TIMEOUT", "ZENODO_CONFIG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "zenodo.yml"
    path.write_text(
        "zenodo_token_sandbox: sandbox-token\n"
        "zenodo_token_production: production-token\n"
    )
    return str(path)


@pytest.fixture
def storage(tmp_path):
    root = tmp_path / "storage"
    root.mkdir()
    (root / "paper.pdf").write_bytes(b"%PDF-1.4 dummy")
    for i in (1, 2, 3):
        (root / "dataset.csv.part{}".format(i)).write_bytes("chunk {}\n".format(i).encode())
    return root


@pytest.fixture
def api(config_file, storage):
    """
    A client initialized for the sandbox
    """
    client = ZenodoAPI(ConfigService(config_file), FileService(str(storage)))
    client.init(production=False)
    return client


@pytest.fixture
def metadata():
    """
    Simple snippet of metadata taken from Zenodo API documentation
    """
    return {
        'metadata': {
            'title': 'My first upload',
            'upload_type': 'poster',
            'description': 'This is my first upload',
            'creators': [{'name': 'Doe, John', 'affiliation': 'Zenodo'}],
        }
    }
