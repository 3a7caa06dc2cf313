"""
Random People package: compare two HTTP clients against the RandomUser API.

This package contains:
- config: settings loaded from .env / environment variables
- errors: transport error types and human-readable classification
- api_client: the two HttpClient implementations (requests and urllib)
- state: filter, outcome slots and the state container with its transitions
- orchestrator: request orchestration (busy guard, timing, fetch both)
- transformations: Pandas flattening of profiles into display rows
- job: command line entry point (one comparison cycle)
"""
