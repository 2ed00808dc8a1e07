from os import path

from setuptools import setup

this_directory = path.abspath(path.dirname(__file__))  # pylint: disable=invalid-name
with open(path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()  # pylint: disable=invalid-name

setup(name='sslcertcheck',
      version='1.0.0',
      description='Reports issuance, expiry, issuer and possible problems '
      'of TLS certificates served for a set of domains',
      license='MIT',
      packages=['sslcertcheck'],
      python_requires='>=3.7',
      setup_requires=[
          'wheel',
      ],
      install_requires=[
          'cryptography>=42.0',
          'pyOpenSSL>=20.0.0',
          'requests>=2.20',
      ],
      extras_require={
          'test': [
              'pytest',
          ],
      },
      entry_points={
          'console_scripts': [
              'sslcertcheck=sslcertcheck.__main__:main',
          ],
      },
      classifiers=[
          "Programming Language :: Python :: 3",
          "License :: OSI Approved :: MIT License",
          "Operating System :: POSIX",
          "Development Status :: 4 - Beta",
          "Environment :: Console",
          "Intended Audience :: System Administrators",
          "Natural Language :: English",
          "Topic :: Internet",
          "Topic :: Security",
          "Topic :: Security :: Cryptography",
          "Topic :: System :: Systems Administration",
          "Topic :: Utilities",
      ],
      long_description=long_description,
      long_description_content_type='text/markdown',
      zip_safe=True)
