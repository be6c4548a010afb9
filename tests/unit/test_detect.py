"""Tests for dependency file role detection."""


from core.detect import classify, identify_role
from core.models import FileRole, ManifestFile


class TestRoleDetection:
    """Test assigning roles to dependency files by name."""

    def test_classify_full_set(self, dependency_files):
        """Every file gets exactly one role."""
        files = classify(dependency_files)

        assert files.gemfile.name == "Gemfile"
        assert files.gemspec.name == "example.gemspec"
        assert [f.name for f in files.path_gemspecs] == [
            "plugins/example_plugin/example_plugin.gemspec",
            "vendor/engines/engine.gemspec",
        ]
        assert files.evaled_gemfiles == []
        assert files.lockfile.name == "Gemfile.lock"
        assert files.ruby_version_file.name == ".ruby-version"

    def test_evaled_gemfiles(self):
        """Anything else is treated as a Gemfile fragment."""
        files = classify([
            ManifestFile(name="Gemfile", content=""),
            ManifestFile(name="Gemfile.common", content=""),
            ManifestFile(name="backend/Gemfile", content=""),
            ManifestFile(name="backend/Gemfile.lock", content=""),
        ])

        assert [f.name for f in files.evaled_gemfiles] == ["Gemfile.common", "backend/Gemfile"]
        assert files.lockfile is None

    def test_first_top_level_gemspec_wins(self):
        files = classify([
            ManifestFile(name="a.gemspec", content=""),
            ManifestFile(name="b.gemspec", content=""),
        ])

        assert files.gemspec.name == "a.gemspec"
        assert [f.name for f in files.path_gemspecs] == ["b.gemspec"]

    def test_missing_files(self):
        files = classify([ManifestFile(name="foo.gemspec", content="")])

        assert files.gemfile is None
        assert files.lockfile is None
        assert files.ruby_version_file is None
        assert [role for _, role in files.roles()] == [FileRole.SPECIFICATION_FILE]

    def test_roles_in_output_order(self, dependency_files):
        roles = [role for _, role in classify(dependency_files).roles()]

        assert roles == [
            FileRole.PRIMARY_MANIFEST,
            FileRole.SPECIFICATION_FILE,
            FileRole.PATH_SPECIFICATION_FILE,
            FileRole.PATH_SPECIFICATION_FILE,
            FileRole.LOCK_FILE,
            FileRole.PINNED_VERSION_FILE,
        ]

    def test_identify_role(self, dependency_files):
        """Roles of single files, in the context of their set."""
        by_name = {f.name: f for f in dependency_files}

        assert identify_role(by_name["Gemfile"], dependency_files) is FileRole.PRIMARY_MANIFEST
        assert identify_role(by_name["Gemfile.lock"], dependency_files) is FileRole.LOCK_FILE
        assert (
            identify_role(by_name["vendor/engines/engine.gemspec"], dependency_files)
            is FileRole.PATH_SPECIFICATION_FILE
        )

    def test_identify_role_alone(self):
        gemfile = ManifestFile(name="Gemfile.next", content="")
        assert identify_role(gemfile) is FileRole.SECONDARY_MANIFEST_FRAGMENT

    def test_nested_lockfile_has_no_role(self):
        lockfile = ManifestFile(name="backend/Gemfile.lock", content="")
        assert identify_role(lockfile) is None
