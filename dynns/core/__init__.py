"""Core logic for dynamic namespace requests.

Module Structure:
    - labels.py      : Grammar for label/annotation strings
    - metadata.py    : Merge of manifest and CLI metadata, name resolution
    - sources.py     : Manifest and extra-data loaders (inline or @file)
    - vault.py       : Vault service account accumulation and rendering
    - payload.py     : Namespace request assembly and wire format
    - validators.py  : TTL and required-field validation
    - exceptions.py  : Typed errors with CLI exit codes
    - platform/      : Platform API client (OAuth2 client credentials)

Nothing in this package reads environment variables, prints or exits;
that belongs to dynns.config and the CLI.
"""
