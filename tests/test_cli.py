"""Tests for CLI commands (CliRunner over real files under tmp_path)."""

from __future__ import annotations

from click.testing import CliRunner

from centralconfig.cli import main


def _invoke(*args, input=None):
    return CliRunner().invoke(main, list(args), input=input)


class TestBuildCommand:
    def test_generates_build_props(self, solution, project_xml):
        root = solution(
            {
                "A/A.csproj": project_xml({"TargetFramework": "net8.0"}),
                "B/B.csproj": project_xml({"TargetFramework": "net8.0"}),
            }
        )
        result = _invoke("build", "-d", str(root))

        assert result.exit_code == 0, result.output
        assert "Generated" in result.output
        assert "TargetFramework = net8.0" in result.output
        assert "Phases:" in result.output
        assert (root / "Directory.Build.props").exists()

    def test_existing_file_is_a_warning(self, solution, project_xml):
        root = solution({"A/A.csproj": project_xml({"TargetFramework": "net8.0"})})
        (root / "Directory.Build.props").write_text("<Project />", encoding="utf-8")

        result = _invoke("build", "-d", str(root))

        assert result.exit_code == 0
        assert "already exists" in result.output
        assert (root / "Directory.Build.props").read_text(encoding="utf-8") == "<Project />"

    def test_no_projects(self, tmp_path):
        result = _invoke("build", "-d", str(tmp_path))
        assert result.exit_code == 0
        assert "No project files found" in result.output

    def test_missing_directory(self, tmp_path):
        result = _invoke("build", "-d", str(tmp_path / "nope"))
        assert result.exit_code == 2

    def test_build_has_no_confirmation_flag(self, tmp_path):
        result = _invoke("build", "-d", str(tmp_path), "-y")
        assert result.exit_code == 2
        assert "No such option" in result.output


class TestPackagesCommand:
    def _root(self, solution, project_xml):
        return solution(
            {
                "A/A.csproj": project_xml(packages={"Serilog": "3.1.1"}),
                "B/B.csproj": project_xml(packages={"Serilog": "2.12.0"}),
            }
        )

    def test_prompt_declined_cancels(self, solution, project_xml):
        root = self._root(solution, project_xml)
        result = _invoke("packages", "-d", str(root), input="n\n")

        assert result.exit_code == 0
        assert "Version Conflicts Detected" in result.output
        assert "Operation cancelled." in result.output
        assert not (root / "Directory.Packages.props").exists()

    def test_yes_skips_prompts(self, solution, project_xml):
        root = self._root(solution, project_xml)
        result = _invoke("packages", "-d", str(root), "-y")

        assert result.exit_code == 0, result.output
        props = (root / "Directory.Packages.props").read_text(encoding="utf-8")
        assert 'Version="3.1.1"' in props
        assert 'Version="2.12.0"' not in (root / "B/B.csproj").read_text(encoding="utf-8")

    def test_lowest_strategy(self, solution, project_xml):
        root = self._root(solution, project_xml)
        result = _invoke("packages", "-d", str(root), "-y", "--strategy", "lowest")

        assert result.exit_code == 0, result.output
        props = (root / "Directory.Packages.props").read_text(encoding="utf-8")
        assert 'Version="2.12.0"' in props

    def test_manual_strategy_exits_nonzero(self, solution, project_xml):
        root = self._root(solution, project_xml)
        result = _invoke("packages", "-d", str(root), "-y", "--strategy", "manual")

        assert result.exit_code == 1
        assert not (root / "Directory.Packages.props").exists()

    def test_unknown_strategy(self, solution, project_xml):
        root = self._root(solution, project_xml)
        result = _invoke("packages", "-d", str(root), "--strategy", "newest")
        assert result.exit_code == 2


class TestAllCommand:
    def test_generates_both_files(self, solution, project_xml):
        root = solution(
            {
                "A/A.csproj": project_xml({"TargetFramework": "net8.0"}, {"Serilog": "3.1.1"}),
                "B/B.csproj": project_xml({"TargetFramework": "net8.0"}, {"Serilog": "3.1.1"}),
            }
        )
        result = _invoke("all", "-d", str(root), "-y")

        assert result.exit_code == 0, result.output
        assert (root / "Directory.Build.props").exists()
        assert (root / "Directory.Packages.props").exists()

    def test_existing_build_props_does_not_stop_packages(self, solution, project_xml):
        root = solution({"A/A.csproj": project_xml({"TargetFramework": "net8.0"}, {"Serilog": "3.1.1"})})
        (root / "Directory.Build.props").write_text("<Project />", encoding="utf-8")

        result = _invoke("all", "-d", str(root), "-y")

        assert result.exit_code == 0, result.output
        assert "already exists" in result.output
        assert (root / "Directory.Packages.props").exists()
