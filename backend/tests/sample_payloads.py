"""Sample payloads shared by tests: auth context and a minimal Stats API results object."""

AUTH = {
    "provider": "OptiID",
    "credentials": {"access_token": "test-token"},
    "context": {"project_id": "4242"},
}

MINIMAL_RESULTS = {
    "experiment_id": 9300001,
    "start_time": "2024-01-01T00:00:00Z",
    "end_time": "2024-01-15T12:00:00Z",
    "metrics": [
        {
            "name": "Purchases",
            "results": {
                "111": {"name": "Original", "rate": 0.034, "is_baseline": True},
                "222": {
                    "name": "Variation #1",
                    "rate": 0.036,
                    "lift": {"value": 0.0588, "significance": 0.95},
                },
            },
        },
    ],
    "reach": {
        "total_count": 10000,
        "variations": {
            "111": {"name": "Original", "count": 5000, "is_baseline": True},
            "222": {"name": "Variation #1", "count": 5000, "is_baseline": False},
        },
    },
    "stats_config": {"confidence_level": 0.9},
}
