#!/usr/bin/env python3
"""
编译产物加载、配置和命令行测试

测试:
1. CombinedJsonLoader - combined-json 读取和索引构建
2. load_config - toml 配置读取
3. main - 命令行端到端
"""

import io
import json
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

# 添加src到路径
sys.path.insert(0, str(Path(__file__).parent / "src"))

from layout_fixtures import LegacyAstBuilder, inheritance_fixture

from layout_toolkit.cli import main
from layout_toolkit.config import LayoutToolkitConfig, load_config
from layout_toolkit.errors import ArtifactError, MissingContractDefinition
from layout_toolkit.loader import CombinedJsonLoader, load_combined_json

SOURCE_PATH = "src/Test.sol"


def combined_json_fixture():
    """Base / Derived 两个合约,外加一个接口和一个有问题的合约"""
    builder, unit, base, derived = inheritance_fixture()
    interface = builder.contract("IVault", [builder.function("deposit")])
    broken = builder.contract("Broken", [
        builder.variable("bad", builder.mapping(
            builder.mapping(builder.elementary("address"), builder.elementary("bool")),
            builder.elementary("uint256"),
        )),
    ])
    unit["children"].extend([interface, broken])

    return {
        "contracts": {
            f"{SOURCE_PATH}:Base": {"bin": "6080", "srcmap": f"{base['src']}:-;;:1:0:i"},
            f"{SOURCE_PATH}:Derived": {"bin": "6080", "srcmap": f"{derived['src']}:-;:3",
                                       "srcmap-runtime": "0:1:0:-"},
            f"{SOURCE_PATH}:IVault": {"bin": "", "srcmap": ""},
            f"{SOURCE_PATH}:Broken": {"bin": "6080", "srcmap": f"{broken['src']}:-"},
        },
        "sourceList": [SOURCE_PATH],
        "sources": {SOURCE_PATH: {"AST": unit}},
        "version": "0.4.26+commit.4563c3fc",
    }


class TestCombinedJsonLoader(unittest.TestCase):
    """测试combined-json加载器"""

    def setUp(self):
        self.data = combined_json_fixture()
        self.artifacts = CombinedJsonLoader().load(self.data)

    def test_contracts_loaded(self):
        """测试合约和source map读取"""
        self.assertEqual(set(self.artifacts.contracts),
                         {f"{SOURCE_PATH}:{n}" for n in ["Base", "Derived", "IVault", "Broken"]})
        derived = self.artifacts.find_contract("Derived")
        self.assertEqual(derived.full_name, f"{SOURCE_PATH}:Derived")
        self.assertEqual(derived.source_path, SOURCE_PATH)
        self.assertEqual(len(derived.creation_srcmap), 2)
        self.assertEqual(len(derived.runtime_srcmap), 1)
        self.assertEqual(self.artifacts.source_list, [SOURCE_PATH])

    def test_storage_layout_by_name(self):
        """测试按短名和完整名计算存储布局"""
        expected = [
            "a (Base)\n  Type: uint256",
            "b (Derived)\n  Type: mapping(address => mapping(uint256 => bool))",
        ]
        self.assertEqual(self.artifacts.storage_layout("Derived"), expected)
        self.assertEqual(self.artifacts.storage_layout(f"{SOURCE_PATH}:Derived"), expected)

    def test_interface_without_srcmap(self):
        """测试接口没有creation source map"""
        names = [c.name for c in self.artifacts.deployable_contracts()]
        self.assertNotIn("IVault", names)
        with self.assertRaises(MissingContractDefinition):
            self.artifacts.storage_layout("IVault")

    def test_find_contract_errors(self):
        """测试合约名不存在或有歧义"""
        with self.assertRaises(ArtifactError):
            self.artifacts.find_contract("Missing")

        data = combined_json_fixture()
        data["contracts"]["src/Other.sol:Base"] = {"srcmap": ""}
        artifacts = CombinedJsonLoader().load(data)
        with self.assertRaises(ArtifactError):
            artifacts.find_contract("Base")

    def test_legacy_ast_key(self):
        """测试legacyAST字段优先"""
        data = combined_json_fixture()
        unit = data["sources"][SOURCE_PATH]["AST"]
        data["sources"][SOURCE_PATH] = {"AST": {"nodeType": "SourceUnit"}, "legacyAST": unit}
        artifacts = CombinedJsonLoader().load(data)
        self.assertEqual(len(artifacts.storage_layout("Derived")), 2)

    def test_invalid_outputs(self):
        """测试格式错误的编译产物"""
        compact = combined_json_fixture()
        compact["sources"][SOURCE_PATH] = {"AST": {"nodeType": "SourceUnit", "nodes": []}}
        no_sources = combined_json_fixture()
        del no_sources["sources"]
        no_contracts = combined_json_fixture()
        del no_contracts["contracts"]

        for data in [compact, no_sources, no_contracts, [], {"sources": {SOURCE_PATH: {}}, "contracts": {}}]:
            with self.assertRaises(ArtifactError):
                CombinedJsonLoader().load(data)

    def test_load_file(self):
        """测试从文件读取"""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "combined.json"
            path.write_text(json.dumps(self.data), encoding="utf-8")
            artifacts = load_combined_json(path)
            self.assertEqual(len(artifacts.storage_layout("Base")), 1)

            broken = Path(tmp) / "broken.json"
            broken.write_text("{not json", encoding="utf-8")
            with self.assertRaises(ArtifactError):
                load_combined_json(broken)

    def test_load_file_unreadable(self):
        """测试非UTF-8内容和目录路径转为ArtifactError"""
        with tempfile.TemporaryDirectory() as tmp:
            binary = Path(tmp) / "binary.json"
            binary.write_bytes(b'{"sources": "\xff\xfe"}')
            with self.assertRaises(ArtifactError):
                load_combined_json(binary)

            with self.assertRaises(ArtifactError):
                load_combined_json(Path(tmp))


class TestConfig(unittest.TestCase):
    """测试toml配置读取"""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, text):
        path = self.root / "layout_toolkit.toml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_load_section(self):
        """测试读取 [storage_layout] 表"""
        path = self.write(
            '[storage_layout]\n'
            'combined_json = "out/combined.json"\n'
            'contracts = ["Token"]\n'
            'keep_going = true\n'
            'log_level = "debug"\n'
        )
        config = load_config(path)

        self.assertEqual(config.combined_json, (self.root / "out" / "combined.json").resolve())
        self.assertEqual(config.contracts, ["Token"])
        self.assertTrue(config.keep_going)
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual(config.log_level_value, 10)

    def test_defaults_without_file(self):
        """测试未指定且不存在配置文件时使用默认值"""
        with mock.patch.object(Path, "cwd", return_value=self.root):
            config = load_config()
        self.assertEqual(config, LayoutToolkitConfig())

    def test_explicit_missing_file(self):
        """测试显式指定的配置文件不存在"""
        with self.assertRaises(FileNotFoundError):
            load_config(self.root / "missing.toml")

    def test_invalid_values(self):
        """测试字段类型错误"""
        for body in ['keep_going = "yes"', 'contracts = "Token"', 'log_level = "LOUD"',
                     'combined_json = 3']:
            path = self.write(f"[storage_layout]\n{body}\n")
            with self.assertRaises(ValueError, msg=body):
                load_config(path)

    def test_invalid_toml(self):
        """测试toml语法错误"""
        path = self.write("[storage_layout\n")
        with self.assertRaises(ValueError):
            load_config(path)


class TestCli(unittest.TestCase):
    """测试命令行"""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.combined = self.root / "combined.json"
        self.combined.write_text(json.dumps(combined_json_fixture()), encoding="utf-8")
        # 避免读取运行目录下的配置文件
        self.cwd_patch = mock.patch.object(Path, "cwd", return_value=self.root)
        self.cwd_patch.start()

    def tearDown(self):
        self.cwd_patch.stop()
        self.tmp.cleanup()

    def run_main(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(argv)
        return code, out.getvalue()

    def test_single_contract(self):
        """测试输出单个合约的存储布局"""
        code, output = self.run_main([str(self.combined), "--contract", "Derived"])

        self.assertEqual(code, 0)
        self.assertEqual(output, (
            f"=== {SOURCE_PATH}:Derived ===\n"
            "a (Base)\n  Type: uint256\n"
            "b (Derived)\n  Type: mapping(address => mapping(uint256 => bool))\n"
        ))

    def test_failure_aborts_by_default(self):
        """测试默认遇到失败立即退出"""
        code, _ = self.run_main([str(self.combined)])
        self.assertEqual(code, 1)

    def test_keep_going(self):
        """测试 --keep-going 跳过失败的合约"""
        code, output = self.run_main([str(self.combined), "--keep-going"])

        self.assertEqual(code, 0)
        self.assertIn(f"=== {SOURCE_PATH}:Base ===", output)
        self.assertIn(f"=== {SOURCE_PATH}:Derived ===", output)
        self.assertNotIn("Broken", output)
        self.assertNotIn("IVault", output)

    def test_missing_inputs(self):
        """测试输入文件或合约不存在"""
        self.assertEqual(self.run_main([str(self.root / "missing.json")])[0], 1)
        self.assertEqual(self.run_main([str(self.combined), "--contract", "Nope"])[0], 1)
        self.assertEqual(self.run_main([])[0], 1)
        self.assertEqual(self.run_main(["--config", str(self.root / "missing.toml")])[0], 1)

    def test_unreadable_input(self):
        """测试输入路径是目录或内容不是UTF-8时返回1"""
        self.assertEqual(self.run_main([str(self.root)])[0], 1)

        binary = self.root / "binary.json"
        binary.write_bytes(b'{"sources": "\xff\xfe"}')
        self.assertEqual(self.run_main([str(binary)])[0], 1)

    def test_config_file(self):
        """测试从配置文件读取参数"""
        config = self.root / "layout_toolkit.toml"
        config.write_text(
            '[storage_layout]\n'
            'combined_json = "combined.json"\n'
            'contracts = ["Base"]\n',
            encoding="utf-8",
        )
        code, output = self.run_main(["--config", str(config)])

        self.assertEqual(code, 0)
        self.assertEqual(output, f"=== {SOURCE_PATH}:Base ===\na (Base)\n  Type: uint256\n")


def run_tests():
    """运行所有测试"""
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    suite.addTests(loader.loadTestsFromTestCase(TestCombinedJsonLoader))
    suite.addTests(loader.loadTestsFromTestCase(TestConfig))
    suite.addTests(loader.loadTestsFromTestCase(TestCli))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_tests()
    sys.exit(0 if success else 1)
