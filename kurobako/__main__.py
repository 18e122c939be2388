from kurobako.cli.main import main

main()
