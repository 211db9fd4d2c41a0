"""dgraph-admin -- a command-line client for Dgraph's HTTP admin surface.

Point it at a Dgraph instance (local or cloud-hosted), optionally supply an
auth header, and run one administrative command::

    dgraph-admin get-health
    dgraph-admin --auth "X-Dgraph-AuthToken:s3cret" update-schema schema.dql
    cat schema.dql | dgraph-admin update-schema
    dgraph-admin --url https://x.cloud.dgraph.io --auth "Dg-Auth:KEY" drop-data --yes

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for configuration, commands, requests and outcomes.
    config: Endpoint configuration resolution (flags, env vars, defaults).
    resolver: Maps a command to the HTTP request that performs it.
    client: Sends a request with httpx and renders the outcome.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
