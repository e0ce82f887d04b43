import io
import json
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from typing import List, Tuple

sys.path.append(os.path.join(os.path.dirname(__file__), "../scripts"))

from cli.config import load_settings, resolve_alias_config_files, resolve_strategy
from cli.main import main


def write_file(root: Path, rel_path: str, content: str) -> str:
    full_path = root / rel_path
    full_path.parent.mkdir(parents=True, exist_ok=True)
    full_path.write_text(content, encoding="utf-8")
    return str(full_path)


def run_cli(argv: List[str]) -> Tuple[int, str, str]:
    out = io.StringIO()
    err = io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCliConfig(unittest.TestCase):
    def test_settings_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            write_file(
                root,
                ".taborder.json",
                '{\n  // team default\n  "sortStrategy": "imports",\n  "aliasConfigFiles": ["tsconfig.app.json"]\n}\n',
            )
            warnings: List[str] = []
            settings, source = load_settings(root, warnings)
            self.assertEqual(source, ".taborder.json")
            self.assertEqual(resolve_strategy(None, settings), "imports")
            self.assertEqual(resolve_strategy("alphabetical", settings), "alphabetical")
            self.assertEqual(resolve_alias_config_files(None, settings), ["tsconfig.app.json"])
            self.assertEqual(resolve_alias_config_files(["x.json"], settings), ["x.json"])
            self.assertEqual(warnings, [])

    def test_defaults_and_bad_settings(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            warnings: List[str] = []
            settings, source = load_settings(root, warnings)
            self.assertIsNone(source)
            self.assertEqual(resolve_strategy(None, settings), "fileSystem")
            self.assertEqual(
                resolve_alias_config_files(None, settings), ["tsconfig.json", "jsconfig.json"]
            )

            write_file(root, "taborder.json", '{"sortStrategy": "random"}')
            settings, source = load_settings(root, warnings)
            self.assertEqual(source, "taborder.json")
            self.assertEqual(resolve_strategy(None, settings), "fileSystem")
            self.assertEqual(len(warnings), 1)

    def test_non_utf8_settings_fall_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            (root / ".taborder.json").write_bytes(b'{"sortStrategy": "\xff"}')
            warnings: List[str] = []
            settings, source = load_settings(root, warnings)
            self.assertEqual((settings, source), ({}, ".taborder.json"))
            self.assertEqual(len(warnings), 1)

            b_ts = write_file(root, "src/b.ts", "")
            a_ts = write_file(root, "a.ts", "")
            code, out, err = run_cli(["--root", temp_dir, "order", b_ts, a_ts])
            self.assertEqual(code, 0)
            self.assertEqual(out.splitlines(), [a_ts, b_ts])
            self.assertIn("warning: Failed to parse .taborder.json", err)


class TestCliCommands(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        write_file(
            self.root,
            "tsconfig.json",
            '{"compilerOptions": {"baseUrl": ".", "paths": {"@/*": ["src/*"]}}}',
        )
        self.main_ts = write_file(self.root, "src/main.ts", "import { App } from '@/app'\n")
        self.app_ts = write_file(self.root, "src/app.ts", "export * from './lib/util'\nconst u = require('./lib/util')\n")
        self.util_ts = write_file(self.root, "src/lib/util.ts", "export const u = 1\n")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_order_imports(self):
        code, out, err = run_cli(
            ["--root", str(self.root), "--strategy", "imports", "order", self.util_ts, self.app_ts, self.main_ts]
        )
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), [self.main_ts, self.app_ts, self.util_ts])
        self.assertIn("[done]", err)

    def test_order_json_explain(self):
        code, out, _ = run_cli(
            [
                "--root",
                str(self.root),
                "--strategy",
                "imports",
                "order",
                "--json",
                "--explain",
                self.util_ts,
                self.main_ts,
                self.app_ts,
            ]
        )
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["name"], "Import Order")
        files = payload["groups"][0]["files"]
        self.assertEqual(
            [(entry["path"], entry["depth"]) for entry in files],
            [(self.main_ts, 0), (self.app_ts, 1), (self.util_ts, 2)],
        )
        self.assertTrue(payload["groups"][0]["changed"])

    def test_strategy_from_settings(self):
        write_file(self.root, ".taborder.json", '{"sortStrategy": "alphabetical"}')
        code, out, _ = run_cli(["--root", str(self.root), "order", self.util_ts, self.main_ts, self.app_ts])
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), [self.app_ts, self.util_ts, self.main_ts])

    def test_tab_list_with_groups(self):
        tab_list = [
            {"path": "src/lib/util.ts", "group": "left"},
            {"path": None, "label": "Settings", "group": "left"},
            {"path": "src/main.ts", "group": "left"},
            {"path": "src/app.ts", "group": "right"},
        ]
        tabs_file = write_file(self.root, "tabs.json", json.dumps(tab_list))
        code, out, _ = run_cli(
            ["--root", str(self.root), "--strategy", "imports", "order", "--json", "--tabs", tabs_file]
        )
        self.assertEqual(code, 0)
        groups = json.loads(out)["groups"]
        self.assertEqual([group["group"] for group in groups], ["left", "right"])
        self.assertEqual(
            [entry["path"] for entry in groups[0]["files"]],
            [self.util_ts, self.main_ts, None],
        )
        self.assertEqual(groups[0]["files"][2]["label"], "Settings")
        self.assertEqual([entry["path"] for entry in groups[1]["files"]], [self.app_ts])

    def test_invalid_tab_list(self):
        tabs_file = write_file(self.root, "tabs.json", '{"path": "x"}')
        code, _, err = run_cli(["--root", str(self.root), "order", "--tabs", tabs_file])
        self.assertEqual(code, 2)
        self.assertIn("expected a JSON array", err)

    def test_order_writes_out_file(self):
        out_file = self.root / "out" / "order.json"
        code, _, err = run_cli(
            ["--root", str(self.root), "--strategy", "fileSystem", "order", "--out", str(out_file), self.util_ts, self.main_ts]
        )
        self.assertEqual(code, 0)
        payload = json.loads(out_file.read_text(encoding="utf-8"))
        self.assertEqual(payload["strategy"], "fileSystem")
        self.assertEqual(
            [entry["path"] for entry in payload["groups"][0]["files"]], [self.main_ts, self.util_ts]
        )
        self.assertIn("Wrote", err)

    def test_graph(self):
        code, out, _ = run_cli(["--root", str(self.root), "graph", self.main_ts, self.app_ts, self.util_ts])
        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertIn(f"{self.main_ts} -> {self.app_ts}", lines)
        self.assertIn(f"{self.app_ts} -> {self.util_ts}", lines)
        self.assertIn(f"2\t{self.util_ts}", lines)

    def test_malformed_alias_config_warns(self):
        write_file(self.root, "tsconfig.json", "{ broken")
        code, out, err = run_cli(
            ["--root", str(self.root), "--strategy", "imports", "order", self.main_ts, self.app_ts]
        )
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), [self.app_ts, self.main_ts])
        self.assertIn("warning: Failed to parse tsconfig.json", err)

    def test_no_command(self):
        code, out, _ = run_cli([])
        self.assertEqual(code, 1)
        self.assertIn("usage", out)


if __name__ == "__main__":
    unittest.main()
