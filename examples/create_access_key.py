#!/usr/bin/env python3
"""
Grant a deploy key to a repository.

Run with:
    GITACCESS_TOKEN=... GITACCESS_BASE_URL=https://git.example.com \
        python examples/create_access_key.py PRJ my-repo ~/.ssh/id_ed25519.pub
"""

import logging
import sys
from pathlib import Path

from gitaccess import (
    AccessKey,
    ClientConfig,
    GitAccessError,
    NotFoundError,
    Permission,
    RepositoryRef,
    configure_logging,
    new_client,
)

if len(sys.argv) != 4:
    print(__doc__)
    sys.exit(2)

configure_logging(level=logging.INFO)

project_key, repo_name, key_file = sys.argv[1:]
repo = RepositoryRef(project_key=project_key, repo_name=repo_name)
key = AccessKey(
    public_key=Path(key_file).expanduser().read_text().strip(),
    label=Path(key_file).stem,
    permission=Permission.READ,
)

try:
    with new_client(ClientConfig.from_env()) as client:
        created = client.create_access_key(repo, key)
except NotFoundError:
    print(f"Repository {project_key}/{repo_name} does not exist")
    sys.exit(1)
except GitAccessError as e:
    print(f"Failed: {e}")
    sys.exit(1)

print(f"Created key {created.id} ({created.permission.value}) on {project_key}/{repo_name}")
