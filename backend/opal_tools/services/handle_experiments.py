"""Experiment Handlers: create_experiment and update_experiment (2 methods).

Invariants:
    - Access token checked before anything else; no outbound call without it
    - Exactly one outbound call per invocation (POST to create, PATCH to update)
    - Defaults applied only to absent fields (status, type, variations, metric fields)
    - account_id injected into the update body and every metric when absent
    - All failures surface as ToolExecutionError with the tool's prefix

Design Decisions:
    - Handler class with http client + settings: explicit dependencies, no globals
    - Update passes unknown parameters through to the PATCH body so Opal can
      set any experiment property the API accepts
"""

import logging

from opal_tools.config import Settings
from opal_tools.core.auth_context import extract_access_token
from opal_tools.core.experiment_defaults import (
    DEFAULT_EXPERIMENT_STATUS, DEFAULT_EXPERIMENT_TYPE,
    apply_metric_defaults, build_url_targeting, default_variations,
)
from opal_tools.core.parse_params import (
    is_absent, parse_int_id, parse_json_array, require_fields,
)
from opal_tools.infrastructure.http_client import ToolHTTPClient
from opal_tools.services.handler_helpers import (
    json_headers, resolve_int_project_id, wraps_tool_errors,
)

logger = logging.getLogger(__name__)

_UPDATE_RESERVED = frozenset({"experiment_id", "metrics"})


class ExperimentHandlers:
    """Experiment lifecycle tools backed by the Optimizely v2 experiments API."""

    def __init__(self, http: ToolHTTPClient, settings: Settings):
        self.http = http
        self.base_url = settings.optimizely_api_base_url
        self.account_id = settings.optimizely_account_id

    @wraps_tool_errors("Failed to create Optimizely experiment")
    async def create_experiment(
        self, parameters: dict, auth: dict | None = None,
    ) -> dict:
        """POST /experiments with defaults for status, type and variations."""
        access_token = extract_access_token(auth)
        require_fields(parameters, ["name"])
        project_id = resolve_int_project_id(parameters.get("project_id"), auth)

        if is_absent(parameters.get("variations")):
            variations = default_variations()
        else:
            variations = parse_json_array(parameters["variations"], "variations")

        body = {
            "project_id": project_id,
            "name": parameters["name"],
            "status": _or_default(parameters.get("status"), DEFAULT_EXPERIMENT_STATUS),
            "type": _or_default(parameters.get("type"), DEFAULT_EXPERIMENT_TYPE),
            "variations": variations,
        }
        if not is_absent(parameters.get("description")):
            body["description"] = parameters["description"]
        if not is_absent(parameters.get("edit_url")):
            body["url_targeting"] = build_url_targeting(parameters["edit_url"])

        logger.info(
            "Creating experiment",
            extra={"tool_name": "create_experiment", "project_id": project_id},
        )
        result = await self.http.send(
            "POST", f"{self.base_url}/experiments",
            action="Failed to create experiment",
            headers=json_headers(access_token),
            json_body=body,
        )
        experiment = result.value
        experiment_id = experiment.get("id") if isinstance(experiment, dict) else None
        return {
            "success": True,
            "status": result.status_code,
            "experiment": experiment,
            "message": (
                f"Experiment created successfully with ID: {experiment_id or 'unknown'}"
            ),
        }

    @wraps_tool_errors("Failed to update Optimizely experiment")
    async def update_experiment(
        self, parameters: dict, auth: dict | None = None,
    ) -> dict:
        """PATCH /experiments/{id}; metrics get aggregator/scope/type/direction defaults."""
        access_token = extract_access_token(auth)
        require_fields(parameters, ["experiment_id"])
        experiment_id = parse_int_id(parameters["experiment_id"], "experiment_id")

        body = {
            key: value for key, value in parameters.items()
            if key not in _UPDATE_RESERVED and value is not None
        }
        body.setdefault("account_id", self.account_id)

        if not is_absent(parameters.get("metrics")):
            metrics = parse_json_array(parameters["metrics"], "metrics")
            body["metrics"] = [
                apply_metric_defaults(metric, self.account_id, i)
                for i, metric in enumerate(metrics)
            ]

        logger.info(
            "Updating experiment",
            extra={"tool_name": "update_experiment", "experiment_id": experiment_id},
        )
        result = await self.http.send(
            "PATCH", f"{self.base_url}/experiments/{experiment_id}",
            action="Failed to update experiment",
            headers=json_headers(access_token),
            json_body=body,
        )
        return {
            "success": True,
            "status": result.status_code,
            "experiment": result.value,
            "message": f"Successfully updated experiment {experiment_id}",
        }


def _or_default(value, default: str):
    return default if is_absent(value) else value
