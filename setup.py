__version__ = "0.1"

from setuptools import setup, find_packages

setup(name="WSGIMock",
      version=__version__,
      description="Mock requests and responses for testing WSGI applications",
      long_description="""\
Call a Web Server Gateway Interface (`PEP 3333`_) application
in-process, with a fake request built from a URL, and inspect the
response.

.. _PEP 3333: https://peps.python.org/pep-3333/

Includes these features...

Testing
-------

* Build a request environment from a (possibly partial) URL and
  drive an application with it, in ``wsgimock.mock``

* Inspect the response: status classification (success, redirect,
  client and server errors), case-insensitive headers, the body and
  anything logged to ``wsgi.errors``, also in ``wsgimock.mock``

* Optionally make writes to ``wsgi.errors`` fatal

* Check components for WSGI-compliance in ``wsgimock.lint``

Tools
-----

* Build responses in ``wsgimock.response``

* Request helpers over the WSGI environment in ``wsgimock.request``

* An application echoing its environment as YAML in ``wsgimock.echo``

* Log mocked requests in Apache combined log format with
  ``wsgimock.translogger``
""",
      classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Internet :: WWW/HTTP :: WSGI",
        "Topic :: Software Development :: Testing",
        ],
      keywords='web application wsgi testing mock',
      license="MIT",
      packages=find_packages(exclude=['tests', 'tests.*']),
      python_requires='>=3.8',
      install_requires=[
        'PasteDeploy',
        'PyYAML',
        ],
      zip_safe=False,
      extras_require={
        'testing': ['pytest'],
        },
      entry_points="""
      [paste.app_factory]
      echo = wsgimock.echo:make_app

      [paste.filter_app_factory]
      lint = wsgimock.lint:make_middleware
      """,
      )
