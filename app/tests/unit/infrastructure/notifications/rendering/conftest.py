import pytest


@pytest.fixture
def template_dirs(tmp_path):
    """Template and locale directories for a ``greeting`` template.

    Returns:
        (templates_dir, locales_dir)
    """
    templates = tmp_path / "templates"
    locales = tmp_path / "locales"
    templates.mkdir()
    locales.mkdir()

    (templates / "welcome_sms.j2").write_text(
        "{{ t.greeting }} {{ notification.message }}\n", encoding="utf-8"
    )
    (locales / "welcome_sms.en.yml").write_text('greeting: "Hi!"\n', encoding="utf-8")
    (locales / "welcome_sms.fr.yml").write_text('greeting: "Salut!"\n', encoding="utf-8")
    return templates, locales
