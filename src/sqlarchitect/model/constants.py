"""Vocabularies offered by the designer's editors."""

from .entities import SQLDialect

DATA_TYPES = {
    SQLDialect.MYSQL: [
        "TINYINT", "SMALLINT", "MEDIUMINT", "INT", "INTEGER", "BIGINT",
        "DECIMAL", "NUMERIC", "FLOAT", "DOUBLE", "REAL", "BIT",
        "CHAR", "VARCHAR", "BINARY", "VARBINARY", "TINYBLOB", "TINYTEXT",
        "TEXT", "BLOB", "MEDIUMTEXT", "MEDIUMBLOB", "LONGTEXT", "LONGBLOB",
        "ENUM", "SET", "DATE", "TIME", "DATETIME", "TIMESTAMP", "YEAR",
        "GEOMETRY", "POINT", "LINESTRING", "POLYGON", "MULTIPOINT",
        "MULTILINESTRING", "MULTIPOLYGON", "GEOMETRYCOLLECTION", "JSON",
    ],
    SQLDialect.POSTGRESQL: [
        "smallint", "integer", "bigint", "decimal", "numeric", "real", "double precision",
        "smallserial", "serial", "bigserial", "char", "varchar", "text",
        "bytea", "timestamp", "date", "time", "interval", "boolean",
        "point", "line", "lseg", "box", "path", "polygon", "circle",
        "inet", "cidr", "macaddr", "bit", "uuid", "xml", "json", "jsonb",
    ],
    SQLDialect.SQLITE: [
        "INTEGER", "REAL", "TEXT", "BLOB", "NUMERIC",
    ],
    SQLDialect.MARIADB: [
        "TINYINT", "SMALLINT", "MEDIUMINT", "INT", "INTEGER", "BIGINT",
        "DECIMAL", "NUMERIC", "FLOAT", "DOUBLE", "REAL", "BIT",
        "CHAR", "VARCHAR", "BINARY", "VARBINARY", "TINYBLOB", "TINYTEXT",
        "TEXT", "BLOB", "MEDIUMTEXT", "MEDIUMBLOB", "LONGTEXT", "LONGBLOB",
        "ENUM", "SET", "DATE", "TIME", "DATETIME", "TIMESTAMP", "YEAR", "JSON",
    ],
    SQLDialect.ORACLE: [
        "VARCHAR2", "NVARCHAR2", "NUMBER", "FLOAT", "DATE", "TIMESTAMP",
        "CLOB", "BLOB", "RAW", "LONG RAW",
    ],
}

ENGINES = ["InnoDB", "MyISAM", "MEMORY", "CSV", "ARCHIVE", "FEDERATED"]

CHARSETS = ["utf8mb4", "utf8", "latin1", "ascii", "utf16", "utf32", "binary"]

COLLATIONS = {
    "utf8mb4": ["utf8mb4_general_ci", "utf8mb4_unicode_ci", "utf8mb4_bin"],
    "utf8": ["utf8_general_ci", "utf8_unicode_ci", "utf8_bin"],
    "latin1": ["latin1_swedish_ci", "latin1_general_ci", "latin1_bin"],
}

PRIVILEGES = [
    "ALL PRIVILEGES", "SELECT", "INSERT", "UPDATE", "DELETE", "CREATE", "DROP",
    "RELOAD", "SHUTDOWN", "PROCESS", "FILE", "GRANT", "REFERENCES", "INDEX",
    "ALTER", "SHOW DATABASES", "SUPER", "CREATE TEMPORARY TABLES", "LOCK TABLES",
    "EXECUTE", "REPLICATION SLAVE", "REPLICATION CLIENT", "CREATE VIEW",
    "SHOW VIEW", "CREATE ROUTINE", "ALTER ROUTINE", "CREATE USER", "EVENT", "TRIGGER",
]


def data_types_for(dialect) -> list:
    """Legal base type tokens for a dialect (empty for an unknown tag)."""
    try:
        return DATA_TYPES[SQLDialect(dialect)]
    except ValueError:
        return []
