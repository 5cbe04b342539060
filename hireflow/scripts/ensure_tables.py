from hireflow.database import ensure_tables_exist


def main():
    created = ensure_tables_exist()
    if created:
        print("Created missing tables:", ", ".join(created))
    print("DB table check complete: created only missing tables.")


if __name__ == "__main__":
    main()
