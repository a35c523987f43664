"""Pytest configuration and fixtures for flowlint tests."""

import pytest


@pytest.fixture
def clean_flowchart() -> str:
    """A well-formed flowchart with nested subgraphs."""
    return """graph TD
    %% request handling
    Client[Browser] --> Gateway(API gateway)
    subgraph Backend
        Gateway -->|REST| Service
        subgraph Storage
            Service --> Db[(Database)]
        end
    end
    Service -.-> Cache{Cache hit?}
"""


@pytest.fixture
def typo_flowchart() -> str:
    """Defines 'Start' but references 'Strat' in an edge."""
    return "graph TD\nStart[Begin] --> Next\nNext --> Strat"


@pytest.fixture
def unclosed_subgraph() -> str:
    """A subgraph without its closing 'end'."""
    return "subgraph S1\nA-->B"
