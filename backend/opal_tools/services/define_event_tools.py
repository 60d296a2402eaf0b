"""Define Event Tools: Opal tool schema for listing a project's events."""

from opal_tools.core.domain_types import ParameterType
from opal_tools.services.define_experiment_tools import OPTIID_AUTH

TOOLS_EVENTS = [
    {
        "name": "list_events",
        "description": (
            "Gets all Events for an Optimizely project. This includes all types "
            "of Events including Pageview Events which are stored as Pages. "
            "Requires OptiID authentication."
        ),
        "parameters": [
            {
                "name": "project_id",
                "type": ParameterType.STRING.value,
                "description": (
                    "The Optimizely project ID to list events for. Optional if "
                    "running from Optimizely context (automatically detected from URL)."
                ),
                "required": False,
            },
            {
                "name": "include_classic",
                "type": ParameterType.BOOLEAN.value,
                "description": (
                    "Set to true to include Goal objects from Optimizely Classic. "
                    "Defaults to false."
                ),
                "required": False,
            },
        ],
        "auth_requirements": OPTIID_AUTH,
    },
]
