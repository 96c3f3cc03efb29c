import pytest
from django.db import IntegrityError
from django.db import transaction

from hrm.org.models import Organization


@pytest.mark.django_db
def test_slug_is_normalized_and_unique():
    org = Organization.objects.create(name="Acme", slug="  ACME ")
    assert org.slug == "acme"
    assert org.is_active is True
    with pytest.raises(IntegrityError), transaction.atomic():
        Organization.objects.create(name="Acme 2", slug="acme")
