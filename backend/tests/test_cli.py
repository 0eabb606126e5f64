from kcnotes.__main__ import main


def test_migrate_command_is_idempotent(tmp_path, monkeypatch, capsys):
    db_path = tmp_path / "cli.db"
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("DATABASE_URL", str(db_path))

    assert main(["migrate"]) == 0
    first = capsys.readouterr().out.split()
    assert first == ["0001_create_users_and_notes", "0002_add_notes_updated_at"]
    assert db_path.exists()

    assert main(["migrate"]) == 0
    assert capsys.readouterr().out.split() == []


def test_serve_refuses_without_secret(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.delenv("SECRET", raising=False)
    assert main(["serve"]) == 1
