"""Define Experiment Tools: Opal tool schemas for creating and updating experiments.

Invariants:
    - Schemas follow the Opal discovery format (name, description, parameters, auth_requirements)
    - Both tools require OptiID auth with the "experiments" scope bundle
    - Metadata only: handlers re-validate every parameter themselves
"""

from opal_tools.core.domain_types import ParameterType

OPTIID_AUTH = [
    {"provider": "OptiID", "scope_bundle": "experiments", "required": True},
]

TOOLS_EXPERIMENTS = [
    {
        "name": "create_experiment",
        "description": (
            "Creates a new A/B experiment in Optimizely Web Experimentation "
            "using the REST API. Requires OptiID authentication."
        ),
        "parameters": [
            {
                "name": "project_id",
                "type": ParameterType.STRING.value,
                "description": (
                    "The Optimizely project ID where the experiment will be "
                    "created. Optional if running from Optimizely context "
                    "(automatically detected from URL)."
                ),
                "required": False,
            },
            {
                "name": "name",
                "type": ParameterType.STRING.value,
                "description": "Name of the experiment",
                "required": True,
            },
            {
                "name": "description",
                "type": ParameterType.STRING.value,
                "description": "Description/hypothesis of the experiment (optional)",
                "required": False,
            },
            {
                "name": "edit_url",
                "type": ParameterType.STRING.value,
                "description": (
                    "URL where the experiment can be edited (e.g., the page URL "
                    "being tested). Adds URL targeting when provided."
                ),
                "required": False,
            },
            {
                "name": "status",
                "type": ParameterType.STRING.value,
                "description": (
                    "Experiment status (not_started, running, paused, archived). "
                    "Defaults to 'not_started'"
                ),
                "required": False,
            },
            {
                "name": "type",
                "type": ParameterType.STRING.value,
                "description": (
                    "Experiment type (a/b, multivariate, multipage). Defaults to 'a/b'"
                ),
                "required": False,
            },
            {
                "name": "variations",
                "type": ParameterType.STRING.value,
                "description": (
                    "Optional JSON string array of variations with traffic "
                    "allocation. If not provided, defaults to 50/50 split between "
                    '"Original" and "Variation #1". Example: '
                    '[{"name":"Original","weight":5000,"totalTraffic":50,'
                    '"percentage":50,"actions":[]},{"name":"Variation #1",'
                    '"weight":5000,"totalTraffic":50,"percentage":50,"actions":[]}]'
                ),
                "required": False,
            },
        ],
        "auth_requirements": OPTIID_AUTH,
    },
    {
        "name": "update_experiment",
        "description": (
            "Updates an existing Optimizely experiment by its ID. Can be used to "
            "add or update metrics and other experiment properties. Requires "
            "OptiID authentication."
        ),
        "parameters": [
            {
                "name": "experiment_id",
                "type": ParameterType.STRING.value,
                "description": "The ID of the experiment to update",
                "required": True,
            },
            {
                "name": "metrics",
                "type": ParameterType.STRING.value,
                "description": (
                    "JSON string array of metrics to add/update. Example: "
                    '[{"event_id":12345,"aggregator":"unique"}]. Each metric can '
                    "have: event_id (required), event_type (optional: "
                    'custom/click/pageview, defaults to "custom"), aggregator '
                    "(optional: unique/count/sum/bounce/exit/ratio, defaults to "
                    '"unique"), scope (optional: session/visitor/event, defaults '
                    'to "visitor"), winning_direction (optional: '
                    'increasing/decreasing, defaults to "increasing"). Note: '
                    "account_id is set automatically when omitted."
                ),
                "required": False,
            },
            {
                "name": "name",
                "type": ParameterType.STRING.value,
                "description": "New experiment name (optional)",
                "required": False,
            },
            {
                "name": "description",
                "type": ParameterType.STRING.value,
                "description": "New experiment description (optional)",
                "required": False,
            },
        ],
        "auth_requirements": OPTIID_AUTH,
    },
]
