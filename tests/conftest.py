import pytest

from crudpanel import ExecutionContext, ResultCache
from tests import Author, Category, Post, Profile, QueryCounter, Tag, make_session


@pytest.fixture
def session():
    session = make_session()
    yield session
    session.close()


@pytest.fixture
def counter(session):
    return QueryCounter(session.get_bind())


@pytest.fixture
def cache():
    return ResultCache()


@pytest.fixture
def context(session, cache):
    return ExecutionContext(session, cache=cache)


@pytest.fixture
def categories(session):
    categories = [
        Category(id=1, name='News'),
        Category(id=2, name='Sports'),
        Category(id=3, name='Weather', active=False)]
    session.add_all(categories)
    session.flush()
    return categories


@pytest.fixture
def tags(session):
    tags = [Tag(id=1, name='red'), Tag(id=2, name='green'), Tag(id=3, name='blue')]
    session.add_all(tags)
    session.flush()
    return tags


@pytest.fixture
def authors(session):
    jane = Author(id=3, name='Jane')
    jane.profile = Profile(id=5, bio='Writes things')
    john = Author(id=4, name='John')
    session.add_all([jane, john])
    session.flush()
    return jane, john


@pytest.fixture
def post(session, categories, tags):
    post = Post(id=1, title='Hello', category=categories[1], tags=[tags[0], tags[2]])
    session.add(post)
    session.flush()
    return post
