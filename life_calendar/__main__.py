from life_calendar.cli import main

if __name__ == "__main__":
    main()
