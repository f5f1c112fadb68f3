# model/custom_types.py
from sqlalchemy import BigInteger, Integer
from sqlalchemy.dialects.mysql import BIGINT

# Unsigned BIGINT on MySQL; SQLite only autoincrements INTEGER primary keys.
MyBIGINT = BigInteger().with_variant(BIGINT(unsigned=True), "mysql").with_variant(Integer(), "sqlite")
