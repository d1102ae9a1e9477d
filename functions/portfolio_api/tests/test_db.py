import unittest

from portfolio_api.db import (
    TOKEN_ALPHABET,
    NullDbClient,
    SqlDbClient,
    decode_json_column,
)
from portfolio_api.errors import ConfigurationError, StorageError


def _project(**overrides) -> dict:
    project = {
        "title": "Vibelink",
        "description": "Where vibes connect",
        "tech": ["React Native", "Expo", "Socket.io"],
        "features": ["Real-time DMs", "Encrypted journaling"],
        "links": [
            {"url": "https://github.com/kichu12348/vibelink", "icon": "Github", "text": "GitHub"}
        ],
    }
    project.update(overrides)
    return project


class SqlDbClientTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL; every test gets its own in-memory database.
    """

    def setUp(self):
        self.db = SqlDbClient("sqlite+pysqlite:///:memory:")
        self.db.init_schema()

    def test_insert_and_get_project_roundtrip(self):
        created = self.db.insert_project(_project())
        self.assertIsNotNone(created.id)

        fetched = self.db.get_project(created.id)
        self.assertIsNotNone(fetched)
        self.assertEqual(fetched.tech, ["React Native", "Expo", "Socket.io"])
        self.assertEqual(fetched.features, ["Real-time DMs", "Encrypted journaling"])
        self.assertEqual(fetched.links, _project()["links"])
        self.assertIsNone(fetched.collaborators)

    def test_collaborators_roundtrip(self):
        collaborators = [
            {
                "name": "Neil",
                "uri": [{"type": "GitHub", "uri": "https://github.com/neilor-21", "icon": "Github"}],
            }
        ]
        created = self.db.insert_project(_project(collaborators=collaborators))
        fetched = self.db.get_project(created.id)
        self.assertEqual(fetched.collaborators, collaborators)

    def test_list_projects_empty_is_absent(self):
        self.assertIsNone(self.db.list_projects())

    def test_list_projects_in_insertion_order(self):
        self.db.insert_project(_project(title="first"))
        self.db.insert_project(_project(title="second"))
        titles = [project.title for project in self.db.list_projects()]
        self.assertEqual(titles, ["first", "second"])

    def test_get_missing_project(self):
        self.assertIsNone(self.db.get_project(999))

    def test_update_replaces_every_column(self):
        created = self.db.insert_project(
            _project(collaborators=[{"name": "Malavika", "uri": []}])
        )
        updated = self.db.update_project(
            created.id, _project(title="Renamed", tech=["Python"])
        )
        self.assertEqual(updated.title, "Renamed")
        self.assertEqual(updated.tech, ["Python"])
        self.assertIsNone(updated.collaborators)
        self.assertEqual(self.db.get_project(created.id).title, "Renamed")

    def test_update_missing_project_returns_none(self):
        self.assertIsNone(self.db.update_project(42, _project()))
        self.assertIsNone(self.db.list_projects())

    def test_delete_project(self):
        created = self.db.insert_project(_project())
        self.assertTrue(self.db.delete_project(created.id))
        self.assertIsNone(self.db.get_project(created.id))
        self.assertFalse(self.db.delete_project(created.id))

    def test_empty_collaborators_survive(self):
        created = self.db.insert_project(_project(collaborators=[]))
        self.assertEqual(self.db.get_project(created.id).collaborators, [])

    def test_insert_projects_in_one_transaction(self):
        created = self.db.insert_projects([_project(title="one"), _project(title="two")])
        self.assertEqual([p.title for p in created], ["one", "two"])
        self.assertTrue(all(p.id is not None for p in created))
        self.assertEqual(self.db.count_projects(), 2)

    def test_insert_projects_writes_nothing_on_failure(self):
        broken = _project(title=None)
        with self.assertRaises(StorageError):
            self.db.insert_projects([_project(title="one"), broken, _project(title="three")])
        self.assertEqual(self.db.count_projects(), 0)

    def test_count_projects(self):
        self.assertEqual(self.db.count_projects(), 0)
        self.db.insert_project(_project())
        self.assertEqual(self.db.count_projects(), 1)

    def test_minted_token_is_valid(self):
        token = self.db.mint_token()
        self.assertEqual(len(token), 32)
        self.assertTrue(set(token) <= set(TOKEN_ALPHABET))
        self.assertTrue(self.db.check_token(token))
        self.assertFalse(self.db.check_token(token + "x"))
        self.assertFalse(self.db.check_token(token[:-1]))

    def test_check_token_rejects_empty_values(self):
        self.assertFalse(self.db.check_token(""))
        self.assertFalse(self.db.check_token(None))

    def test_minted_tokens_are_distinct(self):
        self.assertNotEqual(self.db.mint_token(), self.db.mint_token())

    def test_mint_token_before_schema_init(self):
        db = SqlDbClient("sqlite+pysqlite:///:memory:")
        token = db.mint_token()
        self.assertTrue(db.check_token(token))

    def test_contact_entries_roundtrip(self):
        self.assertIsNone(self.db.list_contact_entries())
        self.db.add_contact_entry({"name": "A", "email": "a@b.com", "message": "hi"})
        self.db.add_contact_entry({"name": "B", "email": "b@c.com", "message": "yo"})
        entries = [entry.as_dict() for entry in self.db.list_contact_entries()]
        self.assertEqual(
            entries,
            [
                {"name": "A", "email": "a@b.com", "message": "hi"},
                {"name": "B", "email": "b@c.com", "message": "yo"},
            ],
        )

    def test_init_schema_is_idempotent(self):
        self.db.insert_project(_project())
        self.assertFalse(self.db.init_schema())
        self.assertEqual(self.db.count_projects(), 1)

    def test_init_schema_reports_creation(self):
        db = SqlDbClient("sqlite+pysqlite:///:memory:")
        self.assertTrue(db.init_schema())
        self.assertFalse(db.init_schema())

    def test_query_without_tables_raises_storage_error(self):
        db = SqlDbClient("sqlite+pysqlite:///:memory:")
        with self.assertRaises(StorageError):
            db.list_projects()


class JsonColumnTests(unittest.TestCase):
    def test_decodes_serialized_text(self):
        self.assertEqual(decode_json_column('["a", "b"]'), ["a", "b"])

    def test_passes_through_decoded_values(self):
        self.assertEqual(decode_json_column(["a", "b"]), ["a", "b"])
        self.assertIsNone(decode_json_column(None))


class SqlDbClientConfigTests(unittest.TestCase):
    def test_missing_url(self):
        with self.assertRaises(ConfigurationError):
            SqlDbClient("")

    def test_unparseable_url(self):
        with self.assertRaises(ConfigurationError):
            SqlDbClient("not a database url")


class NullDbClientTests(unittest.TestCase):
    def setUp(self):
        self.db = NullDbClient()

    def test_reads_are_empty(self):
        self.assertFalse(self.db.init_schema())
        self.assertIsNone(self.db.list_projects())
        self.assertIsNone(self.db.get_project(1))
        self.assertIsNone(self.db.list_contact_entries())
        self.assertEqual(self.db.count_projects(), 0)

    def test_writes_are_dropped(self):
        created = self.db.insert_project(_project())
        self.assertIsNone(created.id)
        self.assertIsNone(self.db.update_project(1, _project()))
        self.assertFalse(self.db.delete_project(1))
        echoed = self.db.insert_projects([_project(), _project(title="other")])
        self.assertEqual([p.id for p in echoed], [None, None])
        self.db.add_contact_entry({"name": "A", "email": "a@b.com", "message": "hi"})
        self.assertIsNone(self.db.list_contact_entries())

    def test_tokens_never_validate(self):
        token = self.db.mint_token()
        self.assertEqual(len(token), 32)
        self.assertFalse(self.db.check_token(token))


if __name__ == "__main__":
    unittest.main()
