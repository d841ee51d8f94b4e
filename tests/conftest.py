from gitaccess.testing.fixtures import (  # noqa: F401
    mock_key_client,
    sample_access_key,
    sample_repository_ref,
    sample_write_key,
)
