from minutemind.main import main

main()
