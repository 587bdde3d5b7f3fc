import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from squadform.taxonomy import LocalTaxonomy, TaxonomyUnavailable  # noqa: E402


class TaxonomyTests(unittest.TestCase):
    def test_synonym_normalization_resolves_canonical_token(self):
        taxonomy = LocalTaxonomy()
        normalized, canonical = taxonomy.normalize_skill(" JS ")
        self.assertEqual(normalized, "js")
        self.assertEqual(canonical, "javascript")

    def test_unmapped_skill_has_no_canonical_token(self):
        taxonomy = LocalTaxonomy()
        self.assertEqual(taxonomy.normalize_skill("Cobol"), ("cobol", None))

    def test_bundled_categories_cover_common_skills(self):
        taxonomy = LocalTaxonomy()
        self.assertIn("frontend", taxonomy.categories_for("react"))
        self.assertIn("data_science", taxonomy.categories_for("machine learning"))
        self.assertIn("design", taxonomy.categories_for("ui/ux"))
        self.assertEqual(taxonomy.categories_for("knitting"), ())

    def test_category_names_keep_declaration_order(self):
        taxonomy = LocalTaxonomy.from_mapping(categories={"zeta": ["z"], "alpha": ["a"]})
        self.assertEqual(taxonomy.category_names(), ("zeta", "alpha"))

    def test_keyword_can_belong_to_several_categories(self):
        taxonomy = LocalTaxonomy.from_mapping(
            categories={"backend": ["python", "go"], "data": ["python", "pandas"]},
        )
        self.assertEqual(taxonomy.categories_for("python"), ("backend", "data"))

    def test_known_phrase_detection(self):
        taxonomy = LocalTaxonomy()
        self.assertTrue(taxonomy.is_known_phrase("react native"))
        self.assertTrue(taxonomy.is_known_phrase("node js"))
        self.assertFalse(taxonomy.is_known_phrase("python docker"))

    def test_tables_are_read_only(self):
        taxonomy = LocalTaxonomy()
        with self.assertRaises(TypeError):
            taxonomy.synonyms["js"] = "java"  # type: ignore[index]
        with self.assertRaises(TypeError):
            taxonomy.categories["frontend"] = frozenset()  # type: ignore[index]

    def test_missing_file_raises_taxonomy_unavailable(self):
        with self.assertRaises(TaxonomyUnavailable):
            LocalTaxonomy("/nonexistent/skills_taxonomy.json")

    def test_invalid_json_raises_taxonomy_unavailable(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertRaises(TaxonomyUnavailable):
                LocalTaxonomy(path)


if __name__ == "__main__":
    unittest.main()
