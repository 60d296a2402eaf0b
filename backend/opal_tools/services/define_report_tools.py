"""Define Report Tools: Opal tool schemas for PDF experiment reports.

Invariants:
    - No auth requirement: the report service is called without credentials
    - generate_experiment_report derives metrics from Stats API results;
      generate_experiment_report_manual takes pre-formatted fields

Design Decisions:
    - Two independent tools instead of one with mode flags: the parameter sets
      barely overlap and each stays self-describing for the model
"""

from opal_tools.core.domain_types import ParameterType


def _param(name: str, type_: ParameterType, description: str, required: bool) -> dict:
    return {
        "name": name,
        "type": type_.value,
        "description": description,
        "required": required,
    }


_RECOMMENDATION_PARAMS = [
    _param(
        "recommendationStatus", ParameterType.STRING,
        "Status of the recommendation (e.g., 'Winner', 'Inconclusive', "
        "'Continue Testing')",
        False,
    ),
    _param(
        "recommendationTitle", ParameterType.STRING,
        "Title of the recommendation (e.g., 'Deploy Variation A to 100% traffic')",
        False,
    ),
    _param(
        "recommendationDescription", ParameterType.STRING,
        "Detailed description explaining the recommendation and reasoning",
        False,
    ),
    _param(
        "actions", ParameterType.STRING,
        'JSON array or comma-separated string of next actions. Example: '
        '["Deploy winning variation","Monitor performance for 30 days",'
        '"Plan follow-up test"] or "Deploy winning variation, Monitor '
        'performance, Plan follow-up"',
        False,
    ),
]

TOOLS_REPORTS = [
    {
        "name": "generate_experiment_report",
        "description": (
            "Generates a PDF report from Optimizely Stats API experiment results "
            "and sends it to a specified email address. Metrics, lifts, "
            "significance, duration and variations are derived from the results."
        ),
        "parameters": [
            _param(
                "recipientEmail", ParameterType.STRING,
                "Email address where the report will be sent", True,
            ),
            _param(
                "results", ParameterType.STRING,
                "JSON string of the Optimizely Stats API results object for the "
                "experiment (must include experiment_id, start_time, end_time, "
                "metrics, reach and stats_config)",
                True,
            ),
            _param(
                "experimentName", ParameterType.STRING,
                "Name of the experiment (defaults to 'Experiment <id>')", False,
            ),
            _param(
                "hypothesis", ParameterType.STRING,
                "The hypothesis being tested in the experiment", False,
            ),
            *_RECOMMENDATION_PARAMS,
        ],
        "auth_requirements": [],
    },
    {
        "name": "generate_experiment_report_manual",
        "description": (
            "Generates a PDF report summarizing experiment data and sends it to a "
            "specified email address. The report includes experiment metrics, "
            "variations, recommendations, and actionable insights."
        ),
        "parameters": [
            _param(
                "recipientEmail", ParameterType.STRING,
                "Email address where the report will be sent", True,
            ),
            _param(
                "experimentId", ParameterType.STRING,
                "Unique identifier for the experiment", True,
            ),
            _param(
                "experimentName", ParameterType.STRING,
                "Name of the experiment", True,
            ),
            _param(
                "hypothesis", ParameterType.STRING,
                "The hypothesis being tested in the experiment", False,
            ),
            _param(
                "duration", ParameterType.STRING,
                "Duration of the experiment (e.g., '14 days', '2 weeks')", False,
            ),
            _param(
                "dateRange", ParameterType.STRING,
                "Date range when the experiment ran (e.g., 'Jan 1 - Jan 14, 2024')",
                False,
            ),
            _param(
                "sampleSize", ParameterType.NUMBER,
                "Total sample size (number of users/sessions in the test)", False,
            ),
            _param(
                "confidenceLevel", ParameterType.NUMBER,
                "Statistical confidence level as percentage (e.g., 95 for 95%)",
                False,
            ),
            _param(
                "metrics", ParameterType.STRING,
                'JSON string array of metrics. Example: [{"name":"Conversion Rate",'
                '"lift":"+5.2%","variations":[{"name":"Control","value":3.4,'
                '"significance":0},{"name":"Variation A","value":3.6,'
                '"significance":95}]}]',
                False,
            ),
            _param(
                "variations", ParameterType.STRING,
                'JSON string array of variations. Example: [{"name":"Control",'
                '"sampleSize":5000,"description":"Original experience"},'
                '{"name":"Variation A","sampleSize":5000,"description":'
                '"New button color"}]',
                False,
            ),
            *_RECOMMENDATION_PARAMS,
        ],
        "auth_requirements": [],
    },
]
