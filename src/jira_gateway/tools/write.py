"""Jira tools that create, change or delete data."""

from jira_gateway.remote.models import RemoteRequest
from jira_gateway.tools.base import (
    LookupTool,
    SingleCallTool,
    ToolArgumentError,
    boolean,
    compact,
    done,
    number,
    object_schema,
    segment,
    string,
    string_list,
)
from jira_gateway.tools.read import API, AGILE, ISSUE_KEY

EPIC_LINK_FIELD_NAME = "Epic Link"
EPIC_LINK_FALLBACK_ID = "customfield_10014"


def issue_fields(issue):
    """Build the ``fields`` object for issue creation."""
    fields = {
        "project": {"key": issue["project"]},
        "summary": issue["summary"],
        "issuetype": {"name": issue.get("issueType") or "Task"},
    }
    if issue.get("description"):
        fields["description"] = issue["description"]
    if issue.get("priority"):
        fields["priority"] = {"name": issue["priority"]}
    if issue.get("assignee"):
        fields["assignee"] = {"id": issue["assignee"]}
    if issue.get("labels"):
        fields["labels"] = issue["labels"]
    if issue.get("parentKey"):
        fields["parent"] = {"key": issue["parentKey"]}
    return fields


def version_body(version):
    return compact(
        name=version["name"],
        project=version["project"],
        released=bool(version.get("released", False)),
        description=version.get("description"),
        releaseDate=version.get("releaseDate"),
    )


def _update_fields(args):
    fields = {}
    if args.get("summary"):
        fields["summary"] = args["summary"]
    if args.get("description"):
        fields["description"] = args["description"]
    if args.get("assignee"):
        fields["assignee"] = {"id": args["assignee"]}
    if args.get("priority"):
        fields["priority"] = {"name": args["priority"]}
    if "labels" in args:
        fields["labels"] = args["labels"]
    return fields


# ---------------------------------------------------------------------------
# Lookup-then-act steps
# ---------------------------------------------------------------------------

def _transition_list(payload):
    if isinstance(payload, dict):
        return payload.get("transitions") or []
    return []


def find_transition(payload, wanted):
    """Match ``wanted`` exactly against transition names and IDs."""
    for transition in _transition_list(payload):
        if transition.get("name") == wanted or transition.get("id") == wanted:
            return transition
    return None


def _transition_request(args, payload):
    transition = find_transition(payload, args["transition"])
    if transition is None:
        available = ", ".join(str(t.get("name")) for t in _transition_list(payload))
        raise ToolArgumentError(
            f'Transition "{args["transition"]}" not found. Available: {available}'
        )
    return RemoteRequest(
        "POST",
        f"{API}/issue/{segment(args['issueKey'])}/transitions",
        body={"transition": {"id": transition["id"]}},
    )


def _transition_result(args, payload, _):
    transition = find_transition(payload, args["transition"])
    return done(f"Issue transitioned to {transition.get('name')}")


def _epic_link_request(args, fields):
    epic_field = None
    for field in fields if isinstance(fields, list) else []:
        if field.get("name") == EPIC_LINK_FIELD_NAME or field.get("id") == EPIC_LINK_FALLBACK_ID:
            epic_field = field
            break
    if epic_field is None:
        raise ToolArgumentError("Epic Link field not found")
    return RemoteRequest(
        "PUT",
        f"{API}/issue/{segment(args['issueKey'])}",
        body={"fields": {epic_field["id"]: args["epicKey"]}},
    )


WRITE_TOOLS = [
    SingleCallTool(
        name="jira_create_issue",
        description="Create a new Jira issue",
        input_schema=object_schema(
            {
                "project": string("Project key"),
                "summary": string("Issue summary/title"),
                "description": string("Issue description"),
                "issueType": string("Issue type (e.g., Story, Bug, Task)", default="Task"),
                "priority": string("Priority name (e.g., High, Medium, Low)"),
                "assignee": string("Assignee account ID"),
                "labels": string_list("Array of labels"),
                "parentKey": string("Parent issue key (for subtasks)"),
            },
            required=["project", "summary", "issueType"],
        ),
        build=lambda a: RemoteRequest("POST", f"{API}/issue", body={"fields": issue_fields(a)}),
    ),
    SingleCallTool(
        name="jira_update_issue",
        description="Update an existing Jira issue",
        input_schema=object_schema(
            {
                "issueKey": ISSUE_KEY,
                "summary": string("New summary/title"),
                "description": string("New description"),
                "assignee": string("Assignee account ID"),
                "priority": string("Priority name"),
                "labels": string_list("Array of labels"),
            },
            required=["issueKey"],
        ),
        build=lambda a: RemoteRequest(
            "PUT", f"{API}/issue/{segment(a['issueKey'])}", body={"fields": _update_fields(a)}
        ),
        shape=lambda a, _: done("Issue updated successfully"),
    ),
    SingleCallTool(
        name="jira_delete_issue",
        description="Delete a Jira issue",
        input_schema=object_schema(
            {
                "issueKey": string("The issue key to delete"),
                "deleteSubtasks": boolean("Whether to delete subtasks (default: false)", default=False),
            },
            required=["issueKey"],
        ),
        build=lambda a: RemoteRequest(
            "DELETE",
            f"{API}/issue/{segment(a['issueKey'])}",
            params={"deleteSubtasks": bool(a["deleteSubtasks"])},
        ),
        shape=lambda a, _: done("Issue deleted successfully"),
    ),
    SingleCallTool(
        name="jira_add_comment",
        description="Add a comment to a Jira issue",
        input_schema=object_schema(
            {"issueKey": ISSUE_KEY, "comment": string("Comment text")},
            required=["issueKey", "comment"],
        ),
        build=lambda a: RemoteRequest(
            "POST", f"{API}/issue/{segment(a['issueKey'])}/comment", body={"body": a["comment"]}
        ),
    ),
    LookupTool(
        name="jira_transition_issue",
        description="Transition an issue to a different status",
        input_schema=object_schema(
            {"issueKey": ISSUE_KEY, "transition": string("Transition name or ID")},
            required=["issueKey", "transition"],
        ),
        lookup=lambda a: RemoteRequest("GET", f"{API}/issue/{segment(a['issueKey'])}/transitions"),
        act=_transition_request,
        shape=_transition_result,
    ),
    SingleCallTool(
        name="jira_add_worklog",
        description="Add a worklog entry to an issue",
        input_schema=object_schema(
            {
                "issueKey": ISSUE_KEY,
                "timeSpent": string('Time spent (e.g., "3h 30m", "1d 4h")'),
                "comment": string("Worklog comment (optional)"),
                "started": string("ISO 8601 date-time when work was started (optional)"),
            },
            required=["issueKey", "timeSpent"],
        ),
        build=lambda a: RemoteRequest(
            "POST",
            f"{API}/issue/{segment(a['issueKey'])}/worklog",
            body=compact(timeSpent=a["timeSpent"], comment=a.get("comment"), started=a.get("started")),
        ),
    ),
    LookupTool(
        name="jira_link_to_epic",
        description="Link an issue to an epic",
        input_schema=object_schema(
            {"issueKey": string("The issue key to link"), "epicKey": string("The epic issue key")},
            required=["issueKey", "epicKey"],
        ),
        lookup=lambda a: RemoteRequest("GET", f"{API}/field"),
        act=_epic_link_request,
        shape=lambda a, fields, _: done(f"Issue {a['issueKey']} linked to epic {a['epicKey']}"),
    ),
    SingleCallTool(
        name="jira_create_sprint",
        description="Create a new sprint",
        input_schema=object_schema(
            {
                "boardId": number("The board ID"),
                "name": string("Sprint name"),
                "startDate": string("ISO 8601 date-time for sprint start (optional)"),
                "endDate": string("ISO 8601 date-time for sprint end (optional)"),
                "goal": string("Sprint goal (optional)"),
            },
            required=["boardId", "name"],
        ),
        build=lambda a: RemoteRequest(
            "POST",
            f"{AGILE}/sprint",
            body=compact(
                name=a["name"],
                originBoardId=a["boardId"],
                startDate=a.get("startDate"),
                endDate=a.get("endDate"),
                goal=a.get("goal"),
            ),
        ),
    ),
    SingleCallTool(
        name="jira_update_sprint",
        description="Update an existing sprint",
        input_schema=object_schema(
            {
                "sprintId": number("The sprint ID"),
                "name": string("Sprint name"),
                "state": string("Sprint state: active, closed, future"),
                "startDate": string("ISO 8601 date-time for sprint start"),
                "endDate": string("ISO 8601 date-time for sprint end"),
                "goal": string("Sprint goal"),
            },
            required=["sprintId"],
        ),
        # The agile API treats POST on a sprint as a partial update
        build=lambda a: RemoteRequest(
            "POST",
            f"{AGILE}/sprint/{segment(a['sprintId'])}",
            body=compact(
                name=a.get("name"),
                state=a.get("state"),
                startDate=a.get("startDate"),
                endDate=a.get("endDate"),
                goal=a.get("goal"),
            ),
        ),
    ),
    SingleCallTool(
        name="jira_create_issue_link",
        description="Create a link between two issues",
        input_schema=object_schema(
            {
                "inwardIssue": string("Inward issue key"),
                "outwardIssue": string("Outward issue key"),
                "linkType": string('Link type name or ID (e.g., "Blocks", "Relates")'),
                "comment": string("Optional comment for the link"),
            },
            required=["inwardIssue", "outwardIssue", "linkType"],
        ),
        build=lambda a: RemoteRequest(
            "POST",
            f"{API}/issueLink",
            body=compact(
                type={"name": a["linkType"]},
                inwardIssue={"key": a["inwardIssue"]},
                outwardIssue={"key": a["outwardIssue"]},
                comment={"body": a["comment"]} if a.get("comment") else None,
            ),
        ),
        shape=lambda a, _: done("Issue link created"),
    ),
    SingleCallTool(
        name="jira_remove_issue_link",
        description="Remove a link between issues",
        input_schema=object_schema({"linkId": string("The issue link ID to remove")}, required=["linkId"]),
        build=lambda a: RemoteRequest("DELETE", f"{API}/issueLink/{segment(a['linkId'])}"),
        shape=lambda a, _: done("Issue link removed"),
    ),
    SingleCallTool(
        name="jira_assign_issue",
        description="Assign an issue to a user",
        input_schema=object_schema(
            {"issueKey": ISSUE_KEY, "accountId": string("User account ID")},
            required=["issueKey", "accountId"],
        ),
        build=lambda a: RemoteRequest(
            "PUT", f"{API}/issue/{segment(a['issueKey'])}/assignee", body={"accountId": a["accountId"]}
        ),
        shape=lambda a, _: done("Issue assigned successfully"),
    ),
    SingleCallTool(
        name="jira_create_version",
        description="Create a new version in a project",
        input_schema=object_schema(
            {
                "project": string("Project key or ID"),
                "name": string("Version name"),
                "description": string("Version description (optional)"),
                "releaseDate": string("Release date in YYYY-MM-DD format (optional)"),
                "released": boolean("Whether the version is released (default: false)", default=False),
            },
            required=["project", "name"],
        ),
        build=lambda a: RemoteRequest("POST", f"{API}/version", body=version_body(a)),
    ),
]
