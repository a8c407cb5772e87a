# gomodkit

Python helpers for working with Go modules. There are two parts:

- **`gomodkit.goop`**: build Go module commands with `go install`, keep the
  builds up to date for local modules, and write small launch scripts into a
  bin directory.
- **`gomodkit.gopages`**: pieces for producing Go documentation pages:
  command-line option parsing, source linkers, a small `{{ ... }}` text
  template engine, `go.mod` reading, HTML link rewriting, word wrapping, and
  a usage-doc generator command.

## Installation

```
pip install gomodkit
```

Building module commands calls the `go` tool, so Go must be installed and on
your `PATH`.

## gomodkit-gendoc

Renders a documentation template that may refer to the gopages usage text:

```
gomodkit-gendoc -template doc_template.go -out doc.go
```

In the template, `{{.Usage}}` is the usage text of the gopages options,
`wordWrap` wraps text to a column count (keeping indentation and avoiding
breaks inside double-quoted phrases) and `comment` turns text into `//`
comment lines. The first blank line before `package main` is removed and
trailing whitespace is trimmed from every line. On failure the command prints
`gendoc: <error>` to standard error and exits with status 1.

The same work is available as `gendoc.gen_doc(template_text)`, which returns
the rendered text, and `gendoc.run(template_path, out_path)`.

## gomodkit.goop

```python
from gomodkit.goop import build, scripts
from gomodkit.goop.environment import new_environment
from gomodkit.goop.package import parse_package_pattern

env = new_environment()
pkg = parse_package_pattern("example.com/tools/cmd/hello@latest", env.static_os_home_dir)
build.build(env, pkg.name, pkg, always_build=True)
scripts.add(env, pkg.name, pkg)
print(scripts.installed(env))
```

- `package.parse_package_pattern(pattern, home_dir, goos=None)` returns a
  `Package` with `path`, `name` and `module_version`. A version after `@` is
  split off; a path under `home_dir` is stored with a leading `~` (not on
  Windows); patterns ending in `/...` raise `PackagePatternError`.
  `package_file_path` returns the local path of a local module, or `None` for
  a remote one, and `package_install_paths` returns the working directory and
  the `go install` pattern (`.` for local modules, `path@version` with
  `latest` as the default for remote ones).
- `environment.Environment` holds the writers, paths and system hooks
  (`get_env`, `look_path`, `run_cmd`). `new_environment()` sets it up for the
  current user: scripts in `goop/bin` under the user configuration directory,
  builds in `goop/install` under the user cache directory.
  `Environment.user_bin_dir()` honours the `GOOP_BIN` environment variable.
- `build.build(env, name, pkg, always_build=False, goos=None)` returns the
  path of the built command, running `go install` only when there is no build
  yet, when `always_build` is set, or when a local module has files newer than
  its build. Failures raise `BuildError`. `find_binary`, `module_root`,
  `has_newer_mod_time` and `should_rebuild` are the pieces it uses.
- `scripts.add(env, name, pkg)` writes a script whose shebang runs
  `goop exec --encoded-name ... --encoded-package ... --`, with the name and
  package base64-encoded, and warns on the error writer when `name` on `PATH`
  is not that script. It raises `ScriptConflictError` rather than overwrite a
  file it did not write. `scripts.installed(env)` lists installed scripts and
  `scripts.remove(env, name)` deletes a script and its build, leaving other
  files alone. `is_app_executable` tells whether a file is such a script.

## gomodkit.gopages

- `flags.parse(*args)` reads gopages options (`-out`, `-base`,
  `-brand-title`, `-brand-description`, `-source-link`, `-include-head`,
  `-internal`, `-gh-pages`, `-gh-pages-user`, `-gh-pages-token`) into an
  `Args`. `-help` raises `HelpRequested` and bad usage raises `FlagError`;
  both carry the text to show in `output`. `Args.linker(module_package)`
  returns a `TemplateLinker` when a source link template is set, otherwise a
  `GoPagesLinker`.
- `linker.GoPagesLinker.link_to_source` links to `<base>/src/<path>`, adding
  `.html` to `.go` files and `#L<line>` for a line. `TemplateLinker` fills a
  template with `.Path` (relative to the module) and `.Line`, returns an empty
  link for paths outside the module, and `should_scrape_package` tells whether
  a path lies inside it.
- `gotemplate.parse(text, funcs)` returns a `Template` whose `execute(data)`
  renders field access, literals, function calls, pipelines, `if`/`else`,
  comments and trim markers. Errors raise `TemplateError`.
- `gomod.module_package(path)` reads the module path from `path/go.mod`, and
  `gomod.parse_module_path(data)` does the same for go.mod contents.
- `pages.customize_source_code_page(base_url, page)` prefixes root-relative
  links with `base_url` and drops "View as plain text" links.
  `pages.node_html(original, base_url, module_package)` wraps a rendering
  function so links into the module point under `base_url` and all other
  package links point to the public Go package documentation site.
- `wrap.word_wrap_lines(columns, text)` wraps text as described above.

## What this package does not do

- There is no `goop` shell command. Installing, listing and removing commands
  is done through the library calls above, and the launch scripts written by
  `scripts.add` expect a `goop exec` command that this package does not
  provide.
- It does not generate or serve a complete documentation site; it provides
  the option parsing, linking, templating and page-rewriting parts only.

## Development

```
pip install -e ".[test]"
pytest
```