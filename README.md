# vinac

`vinac` keeps several files inside one archive file. Each member can be stored as it is or compressed with a simple LZ77 coder.

## Installation

```
pip install .
```

## Command line

```
vinac -ip archive.vc a.txt b.txt    # insert files as they are
vinac -ic archive.vc a.txt b.txt    # insert files LZ77-compressed
vinac -c archive.vc                 # list the members
vinac -m archive.vc a.txt b.txt     # move a.txt to just after b.txt
vinac -m archive.vc a.txt           # move a.txt to the start
vinac -r archive.vc a.txt b.txt     # remove members
vinac -x archive.vc                 # extract every member
vinac -x archive.vc a.txt           # extract the named members
```

- `-ip` and `-ic` create the archive if it does not exist. A member is stored under the path it was given on the command line. If a member of that name is already in the archive, its data is replaced in place and the data of the members after it is shifted to fit.
- `-ic` compresses each file in memory. The file on disk is not changed. If the compressed form is not smaller than the file, the file is stored uncompressed. An empty file cannot be inserted with `-ic`.
- `-c` prints a table of name, user id, original size, stored size, modification time and offset. It prints `Sem arquivos no archive.vc!` for an empty archive.
- `-m` moves a member to just after the target member. If no target is given, or the target is not in the archive, the member moves to the start. The moved member's modification time is set to the current time.
- `-r` removes each named member and closes the gap it leaves. Names that are not in the archive are skipped.
- `-x` writes members to files named after them. A compressed member is expanded. A named member that is not in the archive is reported and skipped.

Errors are printed to standard error, and the command then exits with status 1.

## Archive format

Member data is stored first, one member after another. One 144-byte record per member follows the data. A record holds a name of at most 99 bytes, the uid, the original size, the stored size, the modification time, the insertion order and the offset. The archive ends with the member count as a 32-bit little-endian integer. A member is compressed when its stored size differs from its original size.

## Library use

```python
from vinac.insert import insert_plain, insert_compressed
from vinac.operations import list_members, format_listing, move_member, remove_member, extract

insert_plain("archive.vc", ["notes.txt"])
insert_compressed("archive.vc", ["log.txt"])
print(format_listing(list_members("archive.vc")))
move_member("archive.vc", "log.txt")          # to the front
remove_member("archive.vc", "notes.txt")      # False if not present
extract("archive.vc", ["log.txt"])
```

`vinac.insert.insert_file` stores a single file. `vinac.directory` reads and writes the directory: `read_directory`, `write_directory`, `find_member`, `extract_member` and the `Member` record. Malformed archives and missing members raise `vinac.directory.ArchiveError`.

The coder can also be used on its own:

```python
from vinac.lz import compress, compress_fast, decompress

packed = compress(b"abcabcabcabcabc")
assert decompress(packed, 15) == b"abcabcabcabcabc"
assert decompress(compress_fast(b"abcabcabcabcabc"), 15) == b"abcabcabcabcabc"
```

`decompress` needs the expanded size. It raises `ValueError` if the data is malformed or does not expand to that size.

## Limitations

- Only regular files are stored. Directories are not walked, and file permissions are not kept.
- Member names longer than 99 bytes are cut short.
- Extraction does not restore modification times.
- `compress` searches the whole history window, so it is slow on large files.