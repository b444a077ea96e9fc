"""Read-only Jira tools."""

from jira_gateway.remote.models import RemoteRequest
from jira_gateway.tools.base import (
    SingleCallTool,
    ToolArgumentError,
    number,
    object_schema,
    segment,
    string,
)

API = "/rest/api/2"
AGILE = "/rest/agile/1.0"

MAX_RESULTS = number("Maximum number of results to return (default: 50)", default=50)
START_AT = number("Starting index for pagination (default: 0)", default=0)
FIELDS = string("Comma-separated list of fields to return (optional)")
EXPAND = string("Comma-separated list of fields to expand (optional)")
ISSUE_KEY = string("The issue key (e.g., PROJ-123)")


def _user_profile_request(args):
    if args.get("accountId"):
        return RemoteRequest("GET", f"{API}/user", params={"accountId": args["accountId"]})
    if args.get("email"):
        return RemoteRequest("GET", f"{API}/user/search", params={"query": args["email"]})
    raise ToolArgumentError("Either accountId or email must be provided")


def _field_search_request(args):
    if args.get("query"):
        return RemoteRequest("GET", f"{API}/field/search", params={"query": args["query"]})
    return RemoteRequest("GET", f"{API}/field")


def _attachments(args, issue):
    fields = issue.get("fields") if isinstance(issue, dict) else None
    return {
        "issueKey": args["issueKey"],
        "attachments": (fields or {}).get("attachment") or [],
    }


READ_TOOLS = [
    SingleCallTool(
        name="jira_get_issue",
        description="Get details of a specific Jira issue by key",
        input_schema=object_schema(
            {
                "issueKey": ISSUE_KEY,
                "fields": FIELDS,
                "expand": string(
                    'Comma-separated list of fields to expand (optional, e.g., "changelog,renderedFields")'
                ),
            },
            required=["issueKey"],
        ),
        build=lambda a: RemoteRequest(
            "GET",
            f"{API}/issue/{segment(a['issueKey'])}",
            params={"fields": a.get("fields"), "expand": a.get("expand")},
        ),
    ),
    SingleCallTool(
        name="jira_search",
        description="Search for Jira issues using JQL (Jira Query Language)",
        input_schema=object_schema(
            {
                "jql": string('JQL query string (e.g., "project = PROJ AND status = Open")'),
                "maxResults": MAX_RESULTS,
                "startAt": START_AT,
                "fields": FIELDS,
            },
            required=["jql"],
        ),
        build=lambda a: RemoteRequest(
            "GET",
            f"{API}/search",
            params={
                "jql": a["jql"],
                "maxResults": a["maxResults"],
                "startAt": a["startAt"],
                "fields": a.get("fields"),
            },
        ),
    ),
    SingleCallTool(
        name="jira_get_all_projects",
        description="List all Jira projects",
        input_schema=object_schema({"expand": EXPAND}),
        build=lambda a: RemoteRequest("GET", f"{API}/project", params={"expand": a.get("expand")}),
    ),
    SingleCallTool(
        name="jira_get_project",
        description="Get details of a specific project",
        input_schema=object_schema(
            {"projectKey": string("Project key or ID"), "expand": EXPAND},
            required=["projectKey"],
        ),
        build=lambda a: RemoteRequest(
            "GET",
            f"{API}/project/{segment(a['projectKey'])}",
            params={"expand": a.get("expand")},
        ),
    ),
    SingleCallTool(
        name="jira_get_project_issues",
        description="Get all issues for a specific project",
        input_schema=object_schema(
            {
                "projectKey": string("Project key"),
                "maxResults": MAX_RESULTS,
                "startAt": START_AT,
            },
            required=["projectKey"],
        ),
        build=lambda a: RemoteRequest(
            "GET",
            f"{API}/search",
            params={
                "jql": f"project = {a['projectKey']} ORDER BY created DESC",
                "maxResults": a["maxResults"],
                "startAt": a["startAt"],
            },
        ),
    ),
    SingleCallTool(
        name="jira_get_worklog",
        description="Get worklogs for a specific issue",
        input_schema=object_schema({"issueKey": ISSUE_KEY}, required=["issueKey"]),
        build=lambda a: RemoteRequest("GET", f"{API}/issue/{segment(a['issueKey'])}/worklog"),
    ),
    SingleCallTool(
        name="jira_get_transitions",
        description="Get available transitions for an issue",
        input_schema=object_schema({"issueKey": ISSUE_KEY}, required=["issueKey"]),
        build=lambda a: RemoteRequest("GET", f"{API}/issue/{segment(a['issueKey'])}/transitions"),
    ),
    SingleCallTool(
        name="jira_search_fields",
        description="Search and get information about Jira fields",
        input_schema=object_schema({"query": string("Search query for field names (optional)")}),
        build=_field_search_request,
    ),
    SingleCallTool(
        name="jira_get_agile_boards",
        description="Get all agile boards",
        input_schema=object_schema(
            {
                "projectKeyOrId": string("Filter by project key or ID (optional)"),
                "type": string("Filter by board type: scrum or kanban (optional)"),
                "maxResults": MAX_RESULTS,
            }
        ),
        build=lambda a: RemoteRequest(
            "GET",
            f"{AGILE}/board",
            params={
                "maxResults": a["maxResults"],
                "projectKeyOrId": a.get("projectKeyOrId"),
                "type": a.get("type"),
            },
        ),
    ),
    SingleCallTool(
        name="jira_get_board_issues",
        description="Get all issues for a specific board",
        input_schema=object_schema(
            {"boardId": number("The board ID"), "maxResults": MAX_RESULTS, "startAt": START_AT},
            required=["boardId"],
        ),
        build=lambda a: RemoteRequest(
            "GET",
            f"{AGILE}/board/{segment(a['boardId'])}/issue",
            params={"maxResults": a["maxResults"], "startAt": a["startAt"]},
        ),
    ),
    SingleCallTool(
        name="jira_get_sprints_from_board",
        description="Get all sprints from a specific board",
        input_schema=object_schema(
            {
                "boardId": number("The board ID"),
                "state": string("Filter by sprint state: active, closed, future (optional)"),
                "maxResults": MAX_RESULTS,
            },
            required=["boardId"],
        ),
        build=lambda a: RemoteRequest(
            "GET",
            f"{AGILE}/board/{segment(a['boardId'])}/sprint",
            params={"maxResults": a["maxResults"], "state": a.get("state")},
        ),
    ),
    SingleCallTool(
        name="jira_get_sprint_issues",
        description="Get all issues in a specific sprint",
        input_schema=object_schema(
            {"sprintId": number("The sprint ID"), "maxResults": MAX_RESULTS, "startAt": START_AT},
            required=["sprintId"],
        ),
        build=lambda a: RemoteRequest(
            "GET",
            f"{AGILE}/sprint/{segment(a['sprintId'])}/issue",
            params={"maxResults": a["maxResults"], "startAt": a["startAt"]},
        ),
    ),
    SingleCallTool(
        name="jira_get_issue_link_types",
        description="Get all issue link types available in Jira",
        input_schema=object_schema({}),
        build=lambda a: RemoteRequest("GET", f"{API}/issueLinkType"),
    ),
    SingleCallTool(
        name="jira_get_user_profile",
        description="Get user information by account ID or email",
        input_schema=object_schema(
            {"accountId": string("User account ID"), "email": string("User email")}
        ),
        build=_user_profile_request,
    ),
    SingleCallTool(
        name="jira_download_attachments",
        description="Get attachment information for an issue",
        input_schema=object_schema({"issueKey": ISSUE_KEY}, required=["issueKey"]),
        build=lambda a: RemoteRequest(
            "GET", f"{API}/issue/{segment(a['issueKey'])}", params={"fields": "attachment"}
        ),
        shape=_attachments,
    ),
    SingleCallTool(
        name="jira_get_project_versions",
        description="Get all versions for a specific project",
        input_schema=object_schema({"projectKey": string("Project key or ID")}, required=["projectKey"]),
        build=lambda a: RemoteRequest("GET", f"{API}/project/{segment(a['projectKey'])}/versions"),
    ),
]
