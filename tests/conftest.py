"""Pytest configuration and fixtures."""


import pytest

from core.models import Dependency, ManifestFile


@pytest.fixture
def sample_gemfile():
    """Sample Gemfile content for testing."""
    return '''source "https://rubygems.org"

gemspec

gem "business", "~> 1.4.0"
gem "statesman", "~> 1.2.0", require: false

group :test do
  gem "rspec", ">= 3.0", "< 4.0" # test runner
end
'''


@pytest.fixture
def sample_gemspec():
    """Sample gemspec content for testing."""
    return '''# frozen_string_literal: true

lib = File.expand_path("lib", __dir__)
$LOAD_PATH.unshift(lib) unless $LOAD_PATH.include?(lib)
require "example/version"

Gem::Specification.new do |spec|
  spec.name          = "example"
  spec.version       = Example::VERSION
  spec.authors       = ["Jane Doe"]
  spec.summary       = "An example gem"

  spec.add_dependency "business", "~> 1.0"
  spec.add_runtime_dependency "statesman", ">= 1.2", "< 3.0"
  spec.add_development_dependency "rspec", "~> 3.0"
end
'''


@pytest.fixture
def sample_lockfile():
    """Sample Gemfile.lock content for testing."""
    return """GEM
  remote: https://rubygems.org/
  specs:
    business (1.4.0)

PLATFORMS
  ruby

DEPENDENCIES
  business (~> 1.4.0)

BUNDLED WITH
   2.4.10
"""


@pytest.fixture
def business():
    """The dependency being update-checked."""
    return Dependency(name="business", version="1.5.0")


@pytest.fixture
def dependency_files(sample_gemfile, sample_gemspec, sample_lockfile):
    """A full set of Bundler dependency files."""
    return [
        ManifestFile(name="Gemfile", content=sample_gemfile),
        ManifestFile(name="Gemfile.lock", content=sample_lockfile),
        ManifestFile(name=".ruby-version", content="3.2.2\n"),
        ManifestFile(name="example.gemspec", content=sample_gemspec),
        ManifestFile(
            name="plugins/example_plugin/example_plugin.gemspec",
            content='require "example_plugin/version"\n'
                    "Gem::Specification.new do |spec|\n"
                    '  spec.name = "example_plugin"\n'
                    "  spec.version = ExamplePlugin::VERSION\n"
                    '  spec.add_dependency "business", "~> 1.0"\n'
                    "end\n",
        ),
        ManifestFile(
            name="vendor/engines/engine.gemspec",
            content='Gem::Specification.new do |spec|\n  spec.name = "engine"\nend\n',
        ),
    ]
