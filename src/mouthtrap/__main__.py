from mouthtrap.main import main

main()
