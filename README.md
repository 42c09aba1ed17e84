# spbuild

`spbuild` reads a short build description, `build.sp` by default, and writes a
`build.ninja` or a `Makefile` that compiles and links C programs.

## Installation

```
pip install .
```

## Usage

```
spbuild
```

This reads `build.sp` from the current directory and writes `build.ninja`
there. To get a Makefile instead:

```
spbuild -G Makefile
```

The backend may be `Ninja` (the default) or `Makefile`. A path given as an
argument is read instead of `build.sp`:

```
spbuild path/to/other.sp
```

The generated file is always written to the current directory. The command
echoes the build description to standard output, prints a line for each
statement-level call and for each header check, and exits with status 1 and an
`ERROR : ...` message on standard error when the description is missing or
invalid, the backend is unknown, or a header check fails.

## The build description

A description is a list of statements. Comments start with `#` or `//` and run
to the end of the line. Strings may use single or double quotes; there are no
escape sequences.

```
# pick the C compiler (defaults to "cc")
cc("gcc")

# fail the generation if a header cannot be preprocessed
check_header("stdio.h")

# build an executable from sources; an optional third argument lists libraries
exe("app", wildcard("src/*.c"))
exe("tool", ["tool/main.c", "tool/args.c"])

# assignments must hold arrays of strings
sources = ["a.c", "b.c"]
```

Statements:

- `exe(output, sources[, libraries])` adds an executable target; every source
  `x.c` is compiled to `x.c.o`. The libraries are accepted but add no link
  flags.
- `cc(path)` sets the C compiler written into the generated file and used for
  header checks.
- `check_header(name[, define])` runs `<compiler> -E` on a temporary file that
  includes `name` and stops the generation with an error if that fails. The
  second argument is accepted but not used.
- `name = [...]` stores an array under `name`. Stored variables cannot be
  referred to later in the description.

Expressions:

- `wildcard("folder/*.ext")` gives the regular files directly in `folder` whose
  extension is `.ext`, sorted by name.
- `[...]` is an array of strings.

When the `mold` linker is on `PATH`, the generated link flags use
`-fuse-ld=mold`. A Makefile also gets `all` and `clean` targets. Each target
is written once, even if several executables share a source file.

## Using it from Python

```python
from spbuild.backend import BackendType
from spbuild.build import render_build, gen_build
from spbuild.lexer import lex
from spbuild.parser import parse

build = parse(lex('exe("app", ["main.c"])'))
text = render_build(build, BackendType.MAKEFILE)  # the file content as a string
```

`gen_build(build, backend_type, directory=".")` writes the file and returns
its path. Errors are raised as `spbuild.lexer.LexError` and
`spbuild.backend.BuildError` (with `spbuild.parser.ParseError` and
`spbuild.tasks.TaskFailedError` as subclasses of the latter).

## What it does not do

`spbuild` only writes the build file. It does not run `ninja` or `make`, does
not compile anything itself beyond the preprocessor run of a header check, and
does not turn `exe` libraries or `check_header` defines into compiler or linker
flags. Only C sources are supported.

## Tests

```
pip install .[test]
pytest
```