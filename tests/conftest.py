import pytest
import mongomock


@pytest.fixture
def mongo_client():
    """Global fixture for mocking MongoDB."""
    return mongomock.MongoClient()


@pytest.fixture
def mock_collection(mocker):
    return mocker.MagicMock()


@pytest.fixture
def mock_mongo_client(mocker, mock_collection):
    """MagicMock client whose client[db][collection] is mock_collection."""
    client = mocker.MagicMock()
    client.__getitem__.return_value.__getitem__.return_value = mock_collection
    return client
