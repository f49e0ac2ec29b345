import os
import tempfile
from os.path import join

from modularizer._impl import results
from modularizer._impl.descriptor import Module
from modularizer._impl.module_info import as_module_info, synthesize_module_descriptor

from jar_support import FAKE_MODULE_INFO_MAGIC, FakeCompiler


def test_inferred_exports_are_sorted():
    source = as_module_info(Module('org.a', requiresModules=['java.sql', 'org.b']), {'org.a.impl', 'org.a'})
    assert source == (
        'module org.a {\n'
        '    exports org.a;\n'
        '    exports org.a.impl;\n'
        '    requires java.sql;\n'
        '    requires org.b;\n'
        '}\n'
    )


def test_explicit_exports_win():
    source = as_module_info(Module('org.a', exportsPackages=['org.a.api']), {'org.a', 'org.a.api'})
    assert 'exports org.a.api;' in source
    assert 'exports org.a;' not in source

    # an explicitly empty list exports nothing
    source = as_module_info(Module('org.a', exportsPackages=[]), {'org.a'})
    assert source == 'module org.a {\n}\n'


def test_synthesize_success():
    with tempfile.TemporaryDirectory() as tmpdir:
        compiler = FakeCompiler()
        result = synthesize_module_descriptor(tmpdir, Module('org.a'), {'org.a'}, compiler, '/mods')
        assert result.ok
        assert result.value.startswith(FAKE_MODULE_INFO_MAGIC)
        assert b'exports org.a;' in result.value
        assert compiler.compiled == ['org.a']
        assert compiler.module_paths == ['/mods']
        with open(join(tmpdir, 'module-info.java')) as fp:
            assert fp.read() == compiler.sources['org.a']


def _synthesize_failure(compiler):
    with tempfile.TemporaryDirectory() as tmpdir:
        result = synthesize_module_descriptor(tmpdir, Module('org.a'), set(), compiler, None)
        assert not result.ok
        assert not result.is_fatal
        return result


def test_synthesize_failures():
    result = _synthesize_failure(FakeCompiler(diagnostics={'org.a': 'error: module not found: org.b'}))
    assert result.kind == results.COMPILATION
    assert 'module not found: org.b' in result.reason

    result = _synthesize_failure(FakeCompiler(timeouts={'org.a'}))
    assert result.kind == results.COMPILER_TIMEOUT
    assert 'did not finish within' in result.reason

    result = _synthesize_failure(FakeCompiler(no_output={'org.a'}))
    assert result.kind == results.MISSING_OUTPUT


def test_compiler_that_cannot_be_launched():
    class _Unlaunchable(object):
        def compile(self, source_dir, module_path=None):
            raise FileNotFoundError(2, 'No such file or directory', '/nowhere/bin/javac')

    result = _synthesize_failure(_Unlaunchable())
    assert result.kind == results.COMPILER_LAUNCH
    assert '/nowhere/bin/javac' in result.reason


def test_unwritable_scratch_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        missing = join(tmpdir, 'gone')
        result = synthesize_module_descriptor(missing, Module('org.a'), set(), FakeCompiler(), None)
        assert result.kind == results.DESCRIPTOR_SOURCE
        assert not os.path.exists(missing)
