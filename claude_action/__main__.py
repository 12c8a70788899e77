from claude_action.prepare import main

main()
