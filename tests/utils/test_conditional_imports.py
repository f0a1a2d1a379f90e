
import pytest

from geodraw.utils.conditional_imports import ConditionalPackageInterceptor


@pytest.fixture
def interceptor(monkeypatch):
    monkeypatch.setattr(ConditionalPackageInterceptor, 'PERMITTED_PACKAGES', {})
    monkeypatch.setattr(ConditionalPackageInterceptor, 'AUTO_DOWNLOAD', False)
    return ConditionalPackageInterceptor


def test_permit_packages(interceptor):
    interceptor.permit_packages(['pkg_a'])
    interceptor.permit_packages({'pkg_b': 'geodraw[b]'})
    assert interceptor.PERMITTED_PACKAGES == {'pkg_a': 'pkg_a', 'pkg_b': 'geodraw[b]'}

    with pytest.raises(TypeError):
        interceptor.permit_packages('pkg_c')


def test_permit_auto_download(interceptor):
    interceptor.permit_auto_download(True)
    assert interceptor.AUTO_DOWNLOAD is True


def test_find_spec(interceptor):
    # Packages never permitted fall through to the usual import error
    assert interceptor.find_spec('not_a_geodraw_dependency', None) is None

    interceptor.permit_packages({'not_a_geodraw_dependency': 'geodraw[test]'})
    with pytest.raises(ModuleNotFoundError, match='pip install geodraw\\[test\\]'):
        interceptor.find_spec('not_a_geodraw_dependency', None)


def test_geodraw_registers_interceptor():
    import sys

    import geodraw

    assert ConditionalPackageInterceptor in sys.meta_path
    assert geodraw.__version__
