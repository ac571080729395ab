import textwrap

import pytest


def go(source: str) -> bytes:
    """Dedent a Go snippet written with 4-space indentation and convert it to gofmt tabs."""
    return textwrap.dedent(source).lstrip("\n").replace("    ", "\t").encode()


@pytest.fixture
def opt_foo() -> bytes:
    return go(
        """
        func (o *OptFoo) Decode(d *jx.Decoder) error {
            if o == nil {
                return errors.New("invalid: unable to decode OptFoo to nil")
            }
            o.Set = true
            if err := o.Value.Decode(d); err != nil {
                return err
            }
            return nil
        }
        """
    )


@pytest.fixture
def decoders_file() -> bytes:
    return go(
        """
        package api

        import (
            "github.com/ogen-go/ogen/validate"
        )

        func decode1(resp *http.Response) (res Res1, _ error) {
            return res, validate.UnexpectedStatusCodeWithResponse(resp)
        }

        func decode2(resp *http.Response) (res Res2, _ error) {
            return res, validate.UnexpectedStatusCodeWithResponse(resp)
        }
        """
    )
