from monoforge.pipeline import main

main()
