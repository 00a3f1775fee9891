import pytest

from formschema import array, number, object_, string


@pytest.fixture
def user_schema():
    return object_(
        {
            "name": string().min_length(1),
            "age": number().min(0).optional(),
            "tags": array(string()),
        }
    )
