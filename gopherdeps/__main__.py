from gopherdeps.cli import main

main()
