"""Tools that fan out one Jira call per item."""

from jira_gateway.remote.errors import describe
from jira_gateway.remote.models import RemoteRequest
from jira_gateway.tools.base import BatchTool, object_schema, segment, string_list
from jira_gateway.tools.read import API
from jira_gateway.tools.write import issue_fields, version_body


def _failure(failure, **context):
    return {
        "success": False,
        **context,
        "kind": failure.kind.value,
        "error": failure.message,
        "suggestion": describe(failure).suggestion,
    }


BATCH_TOOLS = [
    BatchTool(
        name="jira_batch_get_changelogs",
        description="Get changelogs for multiple issues in batch",
        input_schema=object_schema(
            {"issueKeys": string_list("Array of issue keys to get changelogs for")},
            required=["issueKeys"],
        ),
        items_argument="issueKeys",
        item_type=str,
        build_item=lambda key: RemoteRequest(
            "GET", f"{API}/issue/{segment(key)}", params={"expand": "changelog"}
        ),
        shape_success=lambda key, issue: {
            "success": True,
            "issueKey": key,
            "changelog": issue.get("changelog") if isinstance(issue, dict) else None,
        },
        shape_failure=lambda key, failure: _failure(failure, issueKey=key),
    ),
    BatchTool(
        name="jira_batch_create_issues",
        description="Create multiple issues in batch",
        input_schema=object_schema(
            {
                "issues": {
                    "type": "array",
                    "description": "Array of issue objects to create",
                    "items": object_schema(
                        {
                            "project": {"type": "string"},
                            "summary": {"type": "string"},
                            "description": {"type": "string"},
                            "issueType": {"type": "string"},
                            "priority": {"type": "string"},
                            "assignee": {"type": "string"},
                            "labels": {"type": "array", "items": {"type": "string"}},
                        },
                        required=["project", "summary", "issueType"],
                    ),
                }
            },
            required=["issues"],
        ),
        items_argument="issues",
        item_required=("project", "summary", "issueType"),
        build_item=lambda issue: RemoteRequest("POST", f"{API}/issue", body={"fields": issue_fields(issue)}),
        shape_success=lambda issue, created: {"success": True, "issue": created},
        shape_failure=lambda issue, failure: _failure(failure, summary=issue.get("summary")),
    ),
    BatchTool(
        name="jira_batch_create_versions",
        description="Create multiple versions in batch",
        input_schema=object_schema(
            {
                "versions": {
                    "type": "array",
                    "description": "Array of version objects to create",
                    "items": object_schema(
                        {
                            "project": {"type": "string"},
                            "name": {"type": "string"},
                            "description": {"type": "string"},
                            "releaseDate": {"type": "string"},
                            "released": {"type": "boolean"},
                        },
                        required=["project", "name"],
                    ),
                }
            },
            required=["versions"],
        ),
        items_argument="versions",
        item_required=("project", "name"),
        build_item=lambda version: RemoteRequest("POST", f"{API}/version", body=version_body(version)),
        shape_success=lambda version, created: {"success": True, "version": created},
        shape_failure=lambda version, failure: _failure(failure, versionName=version.get("name")),
    ),
]
