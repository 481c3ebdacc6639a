"""GraphQL documents sent to the storefront backend."""

_PRODUCT_FIELDS = """
      id
      name
      sku
      images
      list_price_amount
      list_price_currency
      price_range_exact_amount
      created_at
      updated_at
      productBadges {
        label
        color
      }
      brand_name
      rootCategories {
        id
        name
      }
      productAttributeValues {
        id
        key
        attribute {
          id
          label
          key
        }
      }
"""

# rootCategory.products does not accept limit/offset, the whole tree comes back
CATEGORY_BY_ID_QUERY = f"""
query ProductsByCategory($categoryId: ID!) {{
  rootCategory(id: $categoryId) {{
    id
    name
    slug
    image
    products {{{_PRODUCT_FIELDS}    }}
    subCategories {{
      id
      name
      slug
      products {{{_PRODUCT_FIELDS}      }}
    }}
  }}
}}
"""

CATEGORY_HEADER_QUERY = """
query CategoryHeader($categoryId: ID!) {
  rootCategory(id: $categoryId) {
    id
    name
    slug
    image
  }
}
"""

PRODUCTS_BY_CATEGORY_PAGED_QUERY = f"""
query ProductsByCategoryFiltered($categoryId: ID!, $limit: Int, $offset: Int) {{
  productsByCategory(category_id: $categoryId, limit: $limit, offset: $offset) {{{_PRODUCT_FIELDS}  }}
}}
"""

PRODUCTS_BY_BRAND_QUERY = f"""
query productsByBrand($brand_id: ID!) {{
  productsByBrand(brand_id: $brand_id) {{{_PRODUCT_FIELDS}    offer_discount_percentage
  }}
}}
"""

CATEGORIES_ONLY_QUERY = """
query GetCategoriesOnly {
  rootCategories {
    id
    name
    slug
  }
}
"""

WISHLIST_ITEMS_QUERY = """
query GetWishlistItems($wishlistId: ID!) {
  wishlist(id: $wishlistId) {
    id
    items {
      id
      product {
        id
      }
    }
  }
}
"""
