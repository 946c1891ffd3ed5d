"""
Factories for Django auth models.

Used in tests to create users with group-based roles.
"""

import factory
from django.contrib.auth.models import Group, User
from factory.django import DjangoModelFactory

DEFAULT_PASSWORD = "S3cretPass"


class UserFactory(DjangoModelFactory):
    """
    Factory for User model.

    Pass ``roles=[...]`` to add the user to groups with those names.
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    password = factory.django.Password(DEFAULT_PASSWORD)
    is_active = True

    @factory.post_generation
    def roles(self, create: bool, extracted: list[str] | None, **kwargs) -> None:
        if not create or not extracted:
            return
        for name in extracted:
            group, _ = Group.objects.get_or_create(name=name)
            self.groups.add(group)
