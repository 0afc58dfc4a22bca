# mdbook

Building blocks for turning a directory of Markdown files into a book. The
package covers the book tree, the `book.toml` configuration model, and the
small text and filesystem helpers that renderers and preprocessors use.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## The book tree

`mdbook.book` models a book as a list of items: `Chapter`, `Separator` and
`PartTitle`. Chapters nest through their `sub_items`.

```python
from mdbook.book import Book, Chapter, Separator

intro = Chapter(name="Intro", content="# Intro", path="intro.md")
book = Book()
book.push_item(intro).push_item(Separator())

for item in book:          # depth-first, parents before children
    print(item)

book.for_each_mut(lambda item: None)   # visits children before their parent
data = book.to_dict()                  # JSON-friendly form
same = Book.from_dict(data)
```

`path` and `source_path` are stored as `pathlib.Path`; unless given,
`source_path` is the same as `path`. `Chapter.draft(name, parent_names)` makes
a chapter with no source file, and `chapter.is_draft()` tells the two apart.
`SectionNumber` is a list of integers that prints as `1.2.3.` (an empty one
prints as `0`); a chapter with a number prints as `1.2. Name`.

## Configuration

`mdbook.config.Config` is the in-memory form of `book.toml`. The `[book]`,
`[build]` and `[rust]` tables are typed (`BookConfig`, `BuildConfig` and
`RustConfig` in `mdbook.settings`); every other table is kept as plain data
in `Config.rest`, reachable with dotted keys.

```python
from mdbook.config import Config

cfg = Config.from_str('''
[book]
title = "My Book"

[preprocessor.my-preprocessor]
bar = 123
''')

cfg.get("preprocessor.my-preprocessor.bar")   # 123
cfg.set("output.html.theme", "./themes")
cfg.set("book.title", "Another Title")        # updates cfg.book.title
html = cfg.html_config()                      # HtmlConfig, or None if absent or invalid
print(cfg.to_toml())
```

- `Config.from_disk(path)` reads a file; `Config.from_dict(table)` takes an
  already parsed table.
- `Config.update_from_env(environ=None)` applies `MDBOOK_*` variables from
  `os.environ` or the mapping given: `MDBOOK_BOOK__TITLE` sets `book.title`,
  `MDBOOK_FOO_BAR__BAZ` sets `foo-bar.baz`. Values are parsed as JSON first
  and fall back to plain strings. `parse_env(name)` does the name conversion.
- Older files with top-level `title`, `authors`, `source`, `description` or
  `output.html.destination` are still accepted, with a logged warning;
  `is_legacy_format(table)` detects them.
- `to_dict()` and `to_toml()` leave out `[build]` and `[rust]` when they hold
  only defaults.
- Invalid files and values of the wrong type raise
  `mdbook.settings.ConfigError` (also importable from `mdbook.config`).

`mdbook.settings` also holds `HtmlConfig` and its parts (`Fold`,
`Playground`, `Code`, `Print`, `Search`, `SearchChapterSettings`), and the
enums `TextDirection` and `RustEdition`. `BookConfig.realized_text_direction()`
uses the explicit setting or derives it from the language code;
`HtmlConfig.theme_dir(root)` and `HtmlConfig.uses_smart_punctuation()` are
small conveniences.

## Helpers

- `mdbook.strings`: `take_lines`, `take_anchored_lines`,
  `take_rustdoc_include_lines`, `take_rustdoc_include_anchored_lines` cut line
  ranges (given as a `slice` or `range`) or `ANCHOR:` / `ANCHOR_END:` sections
  out of source text.
- `mdbook.utils`: `normalize_id`, `unique_id_from_content`,
  `id_from_content` (deprecated, warns), `collapse_whitespace`,
  `bracket_escape`, `log_backtrace`, and the `MDBOOK_VERSION` string.
- `mdbook.fs`: `normalize_path`, `path_to_root`, `create_file`, `write_file`,
  `remove_dir_content`, `copy_files_except_ext`, `get_404_output_file`.
- `mdbook.tomlext`: `split_key`, `read_key`, `insert_key`, `delete_key` for
  dotted-key access to nested dictionaries.

## What this package does not do

It is a library of building blocks only. It has no command-line program, and
it does not parse `SUMMARY.md`, load a book from disk, run preprocessors,
render HTML, build a search index or serve and watch a book.