"""Package import tests."""


def test_import_tenet():
    import tenet

    assert tenet.Tenet is not None
    assert "TenantContext" in tenet.__all__


def test_normalize_email():
    from tenet.schemas.user import normalize_email

    assert normalize_email("a@Acme.COM") == "a@acme.com"
    assert normalize_email("not-an-email") == "not-an-email"
