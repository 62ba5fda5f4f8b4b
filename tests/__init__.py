from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Table, UnicodeText, create_engine, event
from sqlalchemy.orm import DeclarativeBase, relationship, sessionmaker

from crudpanel import BelongsTo, ModelResource, QueryTag, Text


class Base(DeclarativeBase):
    pass


post_tag = Table(
    'post_tag', Base.metadata,
    Column('post_id', Integer, ForeignKey('post.id'), primary_key=True),
    Column('tag_id', Integer, ForeignKey('tag.id'), primary_key=True))


class Category(Base):
    __tablename__ = 'category'
    id = Column(Integer, primary_key=True)
    name = Column(UnicodeText, nullable=False)
    active = Column(Boolean, nullable=False, default=True)


class Tag(Base):
    __tablename__ = 'tag'
    id = Column(Integer, primary_key=True)
    name = Column(UnicodeText, nullable=False)


class Author(Base):
    __tablename__ = 'author'
    id = Column(Integer, primary_key=True)
    name = Column(UnicodeText, nullable=False)
    profile = relationship('Profile', uselist=False, back_populates='author')


class Profile(Base):
    __tablename__ = 'profile'
    id = Column(Integer, primary_key=True)
    author_id = Column(Integer, ForeignKey('author.id'), nullable=False)
    bio = Column(UnicodeText)
    author = relationship(Author, back_populates='profile')


class Post(Base):
    __tablename__ = 'post'
    id = Column(Integer, primary_key=True)
    title = Column(UnicodeText, nullable=False)
    archived = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime)
    category_id = Column(Integer, ForeignKey('category.id'))
    category = relationship(Category)
    author_id = Column(Integer, ForeignKey('author.id'))
    author = relationship(Author)
    tags = relationship(Tag, secondary=post_tag)


class CategoryResource(ModelResource):
    model = Category
    column = 'name'


class TagResource(ModelResource):
    model = Tag
    column = 'name'


class ProfileResource(ModelResource):
    model = Profile
    column = 'bio'

    def form_fields(self):
        return [Text('Bio')]


class AuthorResource(ModelResource):
    model = Author
    column = 'name'


class AuthoredProfileResource(ProfileResource):
    def form_fields(self):
        return [Text('Bio'), BelongsTo('Author', resource=AuthorResource())]


class PostResource(ModelResource):
    model = Post
    column = 'title'

    def query_tags(self):
        return [
            QueryTag('Published', lambda query: query.filter(Post.archived.is_(False))).default(),
            QueryTag('Archived', lambda query: query.filter(Post.archived.is_(True)))]


def make_session():
    engine = create_engine('sqlite://')
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False)()


class QueryCounter(object):
    """Counts the SELECT statements executed through an engine."""

    def __init__(self, engine):
        self.statements = []
        event.listen(engine, 'before_cursor_execute', self._before_cursor_execute)

    def _before_cursor_execute(self, conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith('SELECT'):
            self.statements.append(statement)

    @property
    def count(self):
        return len(self.statements)
