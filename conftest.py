import pytest

from django.contrib.auth.models import User

from sword2.models import Item


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """
    Stores bitstreams in a temporary directory for every test
    """
    path = tmp_path / 'media'
    path.mkdir()
    settings.MEDIA_ROOT = str(path)
    return path


@pytest.fixture
def user_leibniz(django_user_model):
    """
    Returns user Gottfried Wilhelm Leibniz
    """
    leibnizg = django_user_model.objects.create(
        username='leibnizg',
        first_name='Gottfried',
        last_name='Leibniz',
        email='gottfried.leibniz@tib.eu'
    )

    return leibnizg


@pytest.fixture
def user_isaac_newton(db):
    """
    Returns the user Isaac Newton
    """
    user = User.objects.create_user(
        username='newton',
        first_name='Isaac',
        last_name='Newton',
        email='isaac.newton@scientists.free',
    )

    return user


@pytest.fixture
def item(user_leibniz):
    """
    Returns an item owned by Leibniz
    """
    return Item.objects.create(
        title='Essais de Théodicée',
        owner=user_leibniz,
    )
