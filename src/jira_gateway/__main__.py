from jira_gateway.main import main

main()
