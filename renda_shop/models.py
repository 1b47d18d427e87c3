from peewee import *
from playhouse.sqlite_ext import SqliteExtDatabase
from config import config

db = SqliteExtDatabase(config.DATABASE)

class BaseModel(Model):
    class Meta:
        database = db

class Product(BaseModel):
    id = IntegerField(primary_key=True)
    name = CharField()
    price = CharField()          # texte affiché, ex. "$53.50"
    category = CharField()
    url = CharField()

def create_tables():
    db.create_tables([Product])
