# suffixfqdn

`suffixfqdn` finds the registrable domain of a URL or host name. For example,
it returns `example.co.uk` for `https://www.example.co.uk:8080/path?x=1`. It
uses the Public Suffix List to do this.

It has no dependencies beyond the standard library.

## Installation

```sh
pip install suffixfqdn
```

## Library use

```python
from suffixfqdn.api import init, get_fqdn, validate_origin
from suffixfqdn.options import Options

# Optional: configure before first use. If you skip this, the defaults apply.
init(Options(allow_private_tlds=False, timeout=10.0))

get_fqdn("https://blog.www.example.com/path")   # "example.com"
get_fqdn("http://stage.host.domain.co.uk/")     # "domain.co.uk"

validate_origin("https://www.example.com", ["example.com", "trusted.org"])  # True
validate_origin("malicious.com", ["example.com"])                           # False
```

`init` creates the shared manager only once. Later calls keep the first
outcome, and that includes a failure. `reset()` discards the shared manager,
so the next call initialises again. If `get_fqdn` runs before `init`, it
initialises with `default_options()`.

If you need several independent managers, create `suffixfqdn.fqdn.FQDN`
objects directly. Each one loads its list when it is constructed.

### Options

`suffixfqdn.options.Options` is a dataclass with these fields:

- `allow_private_tlds` (default `False`): also load suffixes that lie outside
  the ICANN section of the list, such as `github.io`.
- `timeout` (default `10.0`): the HTTP timeout in seconds.
- `public_suffix_url`: where the list is downloaded from. The default is the
  official list.
- `public_suffix_file`: a local copy of the list. If set, it is read instead of
  downloading.
- `opener`: a `urllib.request.OpenerDirector` to use in place of the default
  opener. The default opener requires TLS 1.2 or newer.
- `cancel_event`: a `threading.Event`. If it is set during a download, the
  download is aborted.

Data is accepted as the list only if one of its first ten lines contains the
official list URL. A downloaded list must also be at least 32768 bytes long.

### Errors

All errors come from `suffixfqdn.errors` and derive from `TLDError`:

- `InvalidURLError`: the input cannot be reduced to a registrable name.
- `InvalidTLDError`: no loaded suffix matches the host.
- `PublicSuffixDownloadError`: the list could not be fetched or read. This
  covers a bad status, a network failure, cancellation, or a missing file.
- `PublicSuffixParseError`: the downloaded data could not be read, or is too
  small.
- `PublicSuffixFormatError`: the data is not the Public Suffix List.

`validate_origin` returns `False` for any of these errors and does not raise
them.

## Command line

```sh
suffixfqdn [--private] [--timeout DURATION] [--url LIST_URL] [--verbose] [URL ...]
```

The command prints a table with the registrable domain found for each URL,
then a short origin-validation demonstration. If you give no URLs, it uses a
built-in set of examples.

`--timeout` accepts plain seconds (`10`) or durations such as `10s`, `500ms`
or `1m30s`. If initialisation fails, the command reports the error and exits
with status 1. The report goes to standard output with `--verbose` and to
standard error otherwise.

## Limitations

- The list is not cached. Each new manager downloads it again, unless you
  point `public_suffix_file` at a local copy.
- Wildcard (`*`) and exception (`!`) rules are skipped. Suffixes of more than
  five labels are ignored.
- Loaded suffixes are lower-cased, but input hosts are not. Internationalised
  names are not converted to or from punycode.
- Only `http`, `https`, `ftp`, `ws` and `wss` schemes are recognised in input.
  Any other input is treated as a bare host.