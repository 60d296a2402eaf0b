"""Report Handlers: generate_experiment_report and its manual variant (2 methods).

Invariants:
    - recipientEmail and the report source (results, or experimentId + experimentName)
      are validated before any outbound call
    - Experiment Report Payload built as an ExperimentReport model, sent as camelCase JSON
    - One POST to the report function, no auth header
    - Success requires a JSON object response carrying reportId
    - reportPageUrl = {report_page_base_url}/report/{reportId}
"""

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from opal_tools.config import Settings
from opal_tools.core.errors import MalformedParameterError, UnexpectedResponseError
from opal_tools.core.parse_params import (
    is_absent, parse_int_id, parse_json_array, parse_number, require_fields,
)
from opal_tools.core.report_defaults import build_recommendation, resolve_actions
from opal_tools.core.transform_results import (
    describe_validation_error, parse_stats_results, transform_results,
)
from opal_tools.infrastructure.http_client import ToolHTTPClient
from opal_tools.schemas.report import (
    ExperimentReport, MetricSummary, Recommendation, VariationSummary,
)
from opal_tools.services.handler_helpers import json_headers, wraps_tool_errors

logger = logging.getLogger(__name__)

_METRICS_ADAPTER = TypeAdapter(list[MetricSummary])
_VARIATIONS_ADAPTER = TypeAdapter(list[VariationSummary])


def _validate_list(adapter: TypeAdapter, raw: Any, field: str) -> list:
    items = parse_json_array(raw, field)
    try:
        return adapter.validate_python(items)
    except ValidationError as e:
        path, summary = describe_validation_error(e, field)
        raise MalformedParameterError(f"Invalid {field}: {summary}", path, raw)


class ReportHandlers:
    """PDF report generation through the hosted report function."""

    def __init__(self, http: ToolHTTPClient, settings: Settings):
        self.http = http
        self.report_url = settings.report_function_url
        self.report_page_base_url = settings.report_page_base_url

    @wraps_tool_errors("Failed to generate experiment report")
    async def generate_experiment_report(
        self, parameters: dict, auth: dict | None = None,
    ) -> dict:
        """Transform Stats API results into a report payload and send it."""
        require_fields(parameters, ["recipientEmail", "results"])
        results = parse_stats_results(parameters["results"])
        fields = transform_results(results)

        experiment_name = parameters.get("experimentName")
        if is_absent(experiment_name):
            experiment_name = f"Experiment {fields['experiment_id']}"

        report = ExperimentReport(
            **fields,
            experiment_name=str(experiment_name),
            hypothesis=str(parameters.get("hypothesis") or ""),
            recommendation=Recommendation(**build_recommendation(parameters)),
            actions=resolve_actions(parameters.get("actions")),
        )
        return await self._send_report(parameters["recipientEmail"], report)

    @wraps_tool_errors("Failed to generate experiment report")
    async def generate_experiment_report_manual(
        self, parameters: dict, auth: dict | None = None,
    ) -> dict:
        """Send a report built from caller-formatted fields."""
        require_fields(
            parameters, ["recipientEmail", "experimentId", "experimentName"],
        )
        metrics = []
        if not is_absent(parameters.get("metrics")):
            metrics = _validate_list(_METRICS_ADAPTER, parameters["metrics"], "metrics")
        variations = []
        if not is_absent(parameters.get("variations")):
            variations = _validate_list(
                _VARIATIONS_ADAPTER, parameters["variations"], "variations",
            )

        sample_size = 0
        if not is_absent(parameters.get("sampleSize")):
            sample_size = parse_int_id(parameters["sampleSize"], "sampleSize")
        confidence_level = 0.0
        if not is_absent(parameters.get("confidenceLevel")):
            confidence_level = parse_number(
                parameters["confidenceLevel"], "confidenceLevel",
            )

        report = ExperimentReport(
            experiment_id=str(parameters["experimentId"]),
            experiment_name=str(parameters["experimentName"]),
            hypothesis=str(parameters.get("hypothesis") or ""),
            duration=str(parameters.get("duration") or ""),
            date_range=str(parameters.get("dateRange") or ""),
            sample_size=sample_size,
            confidence_level=confidence_level,
            metrics=metrics,
            variations=variations,
            recommendation=Recommendation(**build_recommendation(parameters)),
            actions=resolve_actions(parameters.get("actions")),
        )
        return await self._send_report(parameters["recipientEmail"], report)

    async def _send_report(self, recipient_email: str, report: ExperimentReport) -> dict:
        experiment_data = report.to_payload()
        logger.info(
            "Requesting experiment report",
            extra={
                "tool_name": "generate_experiment_report",
                "experiment_id": report.experiment_id,
            },
        )
        result = await self.http.send(
            "POST", self.report_url,
            action="Failed to generate report",
            headers=json_headers(),
            json_body={
                "recipientEmail": recipient_email,
                "experimentData": experiment_data,
            },
        )
        body = result.value
        if not isinstance(body, dict) or is_absent(body.get("reportId")):
            raise UnexpectedResponseError(
                f"Report service response has no reportId: {body!r}",
            )
        report_id = body["reportId"]
        return {
            "success": True,
            "reportId": report_id,
            "pdfUrl": body.get("pdfUrl"),
            "reportPageUrl": f"{self.report_page_base_url}/report/{report_id}",
            "message": body.get("message"),
            "experimentData": experiment_data,
            "fullResponse": body,
        }
