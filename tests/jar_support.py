"""
Helpers shared by the modularizer tests: creation of small jar files and an in-process
stand-in for javac.
"""

import json
import os
from os.path import exists, join
from zipfile import ZipFile, ZIP_DEFLATED

from modularizer._impl.javac import CompilerTimeoutException

FAKE_MODULE_INFO_MAGIC = b'\xca\xfe\xba\xbe'


def make_jar(path, entries, compression=ZIP_DEFLATED):
    """
    Creates a jar at `path`. `entries` maps entry names to their content (bytes or str).
    Names ending with '/' are written as directory entries.
    """
    with ZipFile(path, 'w', compression) as zf:
        for name, content in entries.items():
            if name.endswith('/'):
                zf.writestr(name, b'')
            else:
                zf.writestr(name, content)
    return path


def simple_jar_entries(package_dir='org/example', extra=None):
    entries = {
        'META-INF/': b'',
        'META-INF/MANIFEST.MF': b'Manifest-Version: 1.0\r\n\r\n',
        package_dir + '/': b'',
        package_dir + '/Foo.class': FAKE_MODULE_INFO_MAGIC + b'Foo',
        package_dir + '/impl/': b'',
        package_dir + '/impl/Bar.class': FAKE_MODULE_INFO_MAGIC + b'Bar',
        package_dir + '/messages.properties': 'greeting=hello\n',
    }
    if extra:
        entries.update(extra)
    return entries


def write_descriptor(path, artifacts):
    with open(path, 'w') as fp:
        json.dump(artifacts, fp, indent=2)
    return path


def artifact_json(name, module, exports=None, requires=None):
    m = {'name': module}
    if exports is not None:
        m['exportsPackages'] = exports
    if requires is not None:
        m['requiresModules'] = requires
    return {'name': name, 'module': m}


class FakeCompiler(object):
    """
    Implements the compiler contract without a JDK. The compiled descriptor is the
    magic number followed by the source of ``module-info.java``.

    :param dict diagnostics: module name to diagnostics returned when compiling that module
    :param set timeouts: module names whose compilation times out
    :param set no_output: module names whose compilation silently produces nothing
    """
    def __init__(self, diagnostics=None, timeouts=None, no_output=None):
        self.diagnostics = diagnostics or {}
        self.timeouts = timeouts or set()
        self.no_output = no_output or set()
        self.compiled = []
        self.module_paths = []
        self.sources = {}

    def compile(self, source_dir, module_path=None):
        module_info_java = join(source_dir, 'module-info.java')
        assert exists(module_info_java), module_info_java
        with open(module_info_java) as fp:
            source = fp.read()
        module_name = source.split()[1]
        self.compiled.append(module_name)
        self.module_paths.append(module_path)
        self.sources[module_name] = source
        if module_name in self.timeouts:
            raise CompilerTimeoutException('javac ' + module_info_java, 5)
        if module_name in self.diagnostics:
            return self.diagnostics[module_name]
        if module_name in self.no_output:
            return None
        with open(join(source_dir, 'module-info.class'), 'wb') as fp:
            fp.write(FAKE_MODULE_INFO_MAGIC + source.encode())
        return None


def read_jar(path):
    with ZipFile(path) as zf:
        return {info.filename: zf.read(info) for info in zf.infolist()}


def listdir_sorted(path):
    return sorted(os.listdir(path))
