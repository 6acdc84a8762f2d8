from pr_triage.main import main
if __name__ == "__main__":
    main()
