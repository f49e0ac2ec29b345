import os
import tempfile
from os.path import exists, isdir, join
from zipfile import ZipFile, ZIP_STORED

from modularizer._impl.archive import (ArchiveException, allocate_scratch_dir, extract_archive,
                                       find_module_descriptor_entry, output_archive_name, package_of, patch_archive)

from jar_support import make_jar, read_jar, simple_jar_entries


def test_package_of():
    assert package_of('org/example/Foo.class') == 'org.example'
    assert package_of('org/example/impl/Foo$Inner.class') == 'org.example.impl'
    assert package_of('Foo.class') is None
    assert package_of('META-INF/versions/11/org/example/Foo.class') is None
    assert package_of('com/1bad/Foo.class') is None


def test_output_archive_name():
    assert output_archive_name('commons-lang3-3.9.jar') == 'commons-lang3-3.9-mod.jar'
    assert output_archive_name('weird') == 'weird-mod.jar'


def test_scratch_dirs_are_unique():
    with tempfile.TemporaryDirectory() as tmpdir:
        dest = join(tmpdir, 'mods')
        first = allocate_scratch_dir(dest, 'a.jar')
        second = allocate_scratch_dir(dest, 'a.jar')
        assert first != second
        assert isdir(first) and isdir(second)
        assert os.path.basename(first).startswith('a.jar-')


def test_find_module_descriptor_entry():
    with tempfile.TemporaryDirectory() as tmpdir:
        plain = make_jar(join(tmpdir, 'plain.jar'), simple_jar_entries())
        versioned = make_jar(join(tmpdir, 'versioned.jar'), simple_jar_entries(extra={'META-INF/versions/9/module-info.class': b'x'}))
        modular = make_jar(join(tmpdir, 'modular.jar'), simple_jar_entries(extra={'module-info.class': b'x'}))
        with ZipFile(plain) as zf:
            assert find_module_descriptor_entry(zf) is None
        with ZipFile(versioned) as zf:
            assert find_module_descriptor_entry(zf) == 'META-INF/versions/9/module-info.class'
        with ZipFile(modular) as zf:
            assert find_module_descriptor_entry(zf) == 'module-info.class'


def test_extract_archive():
    with tempfile.TemporaryDirectory() as tmpdir:
        entries = simple_jar_entries(extra={
            'Main.class': b'unnamed package',
            'META-INF/versions/11/org/example/Foo.class': b'versioned',
            'org/example/empty/': b'',
            # no directory entry for this one
            'org/resources/data/values.bin': b'\x00\x01\x02',
            'org/classes/only/Only.class': b'only',
        })
        jar = make_jar(join(tmpdir, 'a.jar'), entries)
        dest = join(tmpdir, 'out')
        os.mkdir(dest)
        with ZipFile(jar) as zf:
            packages = extract_archive(zf, dest)
        assert packages == {'org.example', 'org.example.impl', 'org.classes.only'}
        for name, content in entries.items():
            path = join(dest, *name.rstrip('/').split('/'))
            if name.endswith('/'):
                assert isdir(path), path
            else:
                with open(path, 'rb') as fp:
                    expected = content if isinstance(content, bytes) else content.encode()
                    assert fp.read() == expected, name
        assert isdir(join(dest, 'org', 'example', 'empty'))


def test_extract_rejects_entries_outside_destination():
    with tempfile.TemporaryDirectory() as tmpdir:
        jar = make_jar(join(tmpdir, 'evil.jar'), {'org/Foo.class': b'x', '../escaped.txt': b'x'})
        dest = join(tmpdir, 'out')
        os.mkdir(dest)
        with ZipFile(jar) as zf:
            try:
                extract_archive(zf, dest)
            except ArchiveException as e:
                assert '../escaped.txt' in str(e)
            else:
                assert False, 'should have raised ArchiveException'
        assert not exists(join(tmpdir, 'escaped.txt'))


def test_patch_archive_round_trip():
    with tempfile.TemporaryDirectory() as tmpdir:
        entries = simple_jar_entries()
        jar = make_jar(join(tmpdir, 'a.jar'), entries)
        stored = make_jar(join(tmpdir, 'stored.jar'), entries, compression=ZIP_STORED)
        for source in (jar, stored):
            output = join(tmpdir, 'mods', output_archive_name(os.path.basename(source)))
            patch_archive(source, b'compiled descriptor', output)
            original = read_jar(source)
            patched = read_jar(output)
            assert set(patched) == set(original) | {'module-info.class'}
            assert len(patched) == len(original) + 1
            for name, content in original.items():
                assert patched[name] == content, name
            assert patched['module-info.class'] == b'compiled descriptor'
            with ZipFile(source) as inzf, ZipFile(output) as outzf:
                assert [i.filename for i in outzf.infolist()] == [i.filename for i in inzf.infolist()] + ['module-info.class']
                for info in inzf.infolist():
                    assert outzf.getinfo(info.filename).compress_type == info.compress_type
                    assert outzf.getinfo(info.filename).is_dir() == info.is_dir()


def test_failed_patch_leaves_no_output():
    with tempfile.TemporaryDirectory() as tmpdir:
        broken = join(tmpdir, 'broken.jar')
        with open(broken, 'wb') as fp:
            fp.write(b'not a zip file')
        output = join(tmpdir, 'mods', 'broken-mod.jar')
        try:
            patch_archive(broken, b'x', output)
        except Exception:  # pylint: disable=broad-except
            pass
        else:
            assert False, 'should have failed'
        assert os.listdir(join(tmpdir, 'mods')) == []
